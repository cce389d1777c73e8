"""Command-line interface for parsing contracts and invitations.

Provides subcommands for parsing a single contract or invitation to JSON
and for batch-processing a folder of documents into a CSV summary.
"""

import argparse
import csv
import json
import mimetypes
import sys
import time
from pathlib import Path

from hotel_parser.parser import DocumentParser
from hotel_parser.schemas import ParseResult
from hotel_parser.utils.config import load_config
from hotel_parser.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = ("*.pdf", "*.png", "*.jpg", "*.jpeg", "*.webp")
_EXTRA_MEDIA_TYPES = {".webp": "image/webp", ".jpg": "image/jpeg"}
_META_COLUMNS = [
    "filename",
    "status",
    "processing_time_s",
    "confidence_score",
    "used_ocr",
    "error",
]
_SUMMARY_FIELDS = {
    "contract": [
        "venue",
        "location",
        "checkIn",
        "checkOut",
        "eventName",
        "totalAmount",
        "currency",
    ],
    "invite": [
        "eventName",
        "eventType",
        "primaryColor",
        "secondaryColor",
        "accentColor",
        "location",
    ],
}


def guess_media_type(file_path: Path) -> str:
    """Guess a MIME type from a file extension.

    Args:
        file_path: Document path.

    Returns:
        The MIME type, or ``application/octet-stream`` when unknown.
    """
    suffix = file_path.suffix.lower()
    if suffix in _EXTRA_MEDIA_TYPES:
        return _EXTRA_MEDIA_TYPES[suffix]
    media_type, _ = mimetypes.guess_type(file_path.name)
    return media_type or "application/octet-stream"


def _find_documents(input_dir: Path) -> list[Path]:
    """Find all supported document files in a directory.

    Args:
        input_dir: Directory to scan for documents.

    Returns:
        Sorted list of document file paths.
    """
    files: list[Path] = []
    for ext in _SUPPORTED_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def parse_file(parser: DocumentParser, file_path: Path, document_type: str) -> ParseResult:
    """Parse one file as a contract or an invitation."""
    payload = file_path.read_bytes()
    media_type = guess_media_type(file_path)
    if document_type == "invite":
        return parser.parse_invite(payload, media_type)
    return parser.parse_contract(payload, media_type)


def to_json(result: ParseResult) -> str:
    """Serialize a parse result with camelCase keys, omitting empty optionals."""
    return json.dumps(result.model_dump(by_alias=True, exclude_none=True), indent=2)


def _summary_row(file_path: Path, result: ParseResult, document_type: str) -> dict[str, object]:
    row: dict[str, object] = {
        "filename": file_path.name,
        "status": "success" if result.success else "failed",
        "error": result.error,
    }
    if result.data is not None:
        data = result.data.model_dump(by_alias=True)
        row["confidence_score"] = data["confidenceScore"]
        row["used_ocr"] = data["usedOcr"]
        for key in _SUMMARY_FIELDS[document_type]:
            row[key] = data.get(key)
        if document_type == "contract":
            row["rooms"] = sum(room["quantity"] for room in data["rooms"])
    return row


def process_folder(
    input_dir: Path,
    output_csv: Path,
    document_type: str = "contract",
    config_path: Path | None = None,
    verbose: bool = False,
) -> dict[str, int]:
    """Parse all documents in a folder and export a summary CSV.

    Args:
        input_dir: Directory containing document files.
        output_csv: Path for the output CSV file.
        document_type: ``contract`` or ``invite``.
        config_path: Optional YAML configuration file.
        verbose: Whether to print per-file progress.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    parser = DocumentParser(load_config(config_path))

    files = _find_documents(input_dir)
    if not files:
        logger.warning("No documents found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d documents to process", len(files))

    results: list[dict[str, object]] = []
    successful = 0
    failed = 0

    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Processing [{i}/{len(files)}]: {file_path.name}")

        start_time = time.time()
        try:
            result = parse_file(parser, file_path, document_type)
        except OSError as exc:
            logger.error("Failed to read %s: %s", file_path.name, exc)
            results.append({"filename": file_path.name, "status": "failed", "error": str(exc)})
            failed += 1
            continue

        row = _summary_row(file_path, result, document_type)
        row["processing_time_s"] = round(time.time() - start_time, 2)
        results.append(row)
        if result.success:
            successful += 1
        else:
            failed += 1

    _write_csv(results, output_csv)
    logger.info("Results written to %s", output_csv)

    summary = {"total": len(files), "successful": successful, "failed": failed}
    _print_summary(summary, output_csv)
    return summary


def _write_csv(results: list[dict[str, object]], output_path: Path) -> None:
    """Write summary rows to a CSV file.

    Args:
        results: List of result dictionaries.
        output_path: Path for the output CSV file.
    """
    if not results:
        return

    all_keys: set[str] = set()
    for r in results:
        all_keys.update(r.keys())

    field_columns = sorted(all_keys - set(_META_COLUMNS))
    columns = [c for c in _META_COLUMNS if c in all_keys] + field_columns

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(results)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    print(f"\n{'=' * 50}")
    print("Batch Processing Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_csv}")


def _add_single_command(subparsers, name: str, help_text: str) -> None:
    single_parser = subparsers.add_parser(name, help=help_text)
    single_parser.add_argument("file", type=Path, help="Document file to parse")
    single_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Hotel contract and event invitation parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-c", "--config", type=Path, help="YAML configuration file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    _add_single_command(subparsers, "contract", "Parse a hotel contract")
    _add_single_command(subparsers, "invite", "Parse an event invitation")

    batch_parser = subparsers.add_parser("batch", help="Process a folder of documents")
    batch_parser.add_argument("input_dir", type=Path, help="Input directory with documents")
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("results.csv"),
        help="Output CSV file (default: results.csv)",
    )
    batch_parser.add_argument(
        "-t",
        "--type",
        choices=["contract", "invite"],
        default="contract",
        dest="doc_type",
        help="Document type (default: contract)",
    )
    batch_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(config.log_level)

    if args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        process_folder(args.input_dir, args.output, args.doc_type, args.config, args.verbose)
    elif args.command in ("contract", "invite"):
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        result = parse_file(DocumentParser(config), args.file, args.command)
        output_str = to_json(result)
        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output_str)
            print(f"Output written to {args.output}")
        else:
            print(output_str)
        if not result.success:
            sys.exit(2)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
