import argparse
import asyncio
import sys
from pathlib import Path

from sigpack.config.settings import Settings
from sigpack.grouping.engine import GroupingMode
from sigpack.logging.logger import Log
from sigpack.packets.assembler import PacketAssembler
from sigpack.processor.exceptions import PacketAssemblyError
from sigpack.processor.file_loader import FileLoader
from sigpack.processor.processor import build_processor
from sigpack.worker.document_runner import DocumentRunner
from sigpack.workspace.workspace import Workspace, archive_name, write_packets


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find signature pages in transaction PDFs and build signing packets."
    )
    parser.add_argument("files", nargs="+", type=Path, help="PDF documents to process")
    parser.add_argument(
        "--group-by",
        choices=[mode.value for mode in GroupingMode],
        default=GroupingMode.AGREEMENT.value,
    )
    parser.add_argument("--output-dir", type=Path, default=None)
    parser.add_argument("--zip", action="store_true", help="bundle packets into one archive")
    return parser.parse_args(argv)


def build_workspace(settings: Settings) -> Workspace:
    runner = DocumentRunner(build_processor(settings))
    assembler = PacketAssembler(FileLoader(), fallback_name=settings.packet_fallback_name)
    return Workspace(runner, assembler)


async def run(args: argparse.Namespace, settings: Settings) -> int:
    workspace = build_workspace(settings)
    workspace.add_files(args.files)
    await workspace.process_pending()

    for document in workspace.documents:
        Log.info(
            f"{document.name}: {document.status.value}, "
            f"{len(document.extracted_pages)} signature page(s)"
        )

    mode = GroupingMode(args.group_by)
    if not workspace.records():
        Log.warning("No signature pages found; nothing to export")
        return 1
    try:
        packets = await workspace.export_packets(mode)
    except PacketAssemblyError as exc:
        Log.error(f"Failed to generate signature packets: {exc}")
        return 1

    output_dir = args.output_dir or Path(settings.output_dir)
    archive = archive_name(mode) if args.zip else None
    for path in write_packets(packets, output_dir, archive):
        Log.info(f"Wrote {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args -> configure logging -> process -> export."""
    settings = Settings()
    Log.configure(settings.log_level)
    args = parse_args(argv)
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
