import asyncio
import logging
import sys
from argparse import ArgumentParser
from pathlib import Path

from fastapi import HTTPException

from app.services.page_service import PageService

logging.basicConfig(format="%(message)s", level=logging.INFO)
logger = logging.getLogger(__name__)

parser = ArgumentParser(description="Pre-render the blog pages into static HTML files")
parser.add_argument("-o", "--output-dir", required=True, type=str, help="directory to write the pages to")


def _target(output_dir: Path, path: str) -> Path:
    return output_dir.joinpath(path.strip("/"), "index.html")


async def export(output_dir: Path, page_service: PageService | None = None) -> list[Path]:
    page_service = page_service or PageService()
    paths = await page_service.prebuild()
    written = []
    for page in page_service.store.pages():
        target = _target(output_dir, page.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(page.html, encoding="utf-8")
        logger.info(f"Wrote path={page.path} to {target}")
        written.append(target)
    if len(written) < len(paths):
        logger.warning(f"Skipped {len(paths) - len(written)} paths without a rendered page")
    return written


def main(output_dir: str):
    try:
        asyncio.run(export(Path(output_dir)))
    except HTTPException as exc:
        logger.error(f"Export failed: {exc.detail}")
        sys.exit(-2)


if __name__ == "__main__":
    args = parser.parse_args()
    main(args.output_dir)
