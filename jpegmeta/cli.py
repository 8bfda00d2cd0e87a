# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for jpegmeta

Prints the EXIF, GPS and IPTC metadata of JPEG files and can save their
embedded EXIF thumbnails.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from jpegmeta import __version__
from jpegmeta.core import MetadataExtractor
from jpegmeta.exceptions import JPEGMetaError
from jpegmeta.reader import read_file_bytes

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def format_value(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if isinstance(value, tuple):
        return " ".join(str(v) for v in value)
    return str(value)


def format_output(metadata: Dict[str, Any], format_type: str = "text") -> str:
    """
    Format metadata output based on format type.

    Args:
        metadata: Dictionary of group-prefixed tags
        format_type: Output format ('text', 'json', 'csv')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(metadata, indent=2, ensure_ascii=False)

    rows = [(tag, format_value(value)) for tag, value in sorted(metadata.items())]
    if format_type == "csv":
        return "\n".join(["Tag,Value"] + [f"{_csv_field(tag)},{_csv_field(text)}" for tag, text in rows])
    return "\n".join(f"{tag}: {text}" for tag, text in rows)


def _csv_field(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def parse_api_options(api_args: Optional[List[str]]) -> Dict[str, Any]:
    """
    Parse -api OPT=VAL arguments into an options dictionary.

    A bare OPT sets a boolean option to True.
    """
    options: Dict[str, Any] = {}
    for api_opt in api_args or []:
        if '=' in api_opt:
            opt_name, opt_val = api_opt.split('=', 1)
            options[opt_name.strip()] = opt_val.strip()
        else:
            options[api_opt.strip()] = True
    return options


def write_thumbnail(thumbnail: bytes, file_path: Path, output_dir: Path) -> Path:
    """Save a thumbnail as <output_dir>/<stem>_thumb.jpg and return its path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"{file_path.stem}_thumb.jpg"
    output_path.write_bytes(thumbnail)
    return output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='jpegmeta',
        description="jpegmeta - Read EXIF, GPS and IPTC metadata from JPEG files (100% Pure Python)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read all metadata
  jpegmeta image.jpg

  # Read in JSON format
  jpegmeta -j image.jpg

  # Save embedded thumbnails
  jpegmeta -thumbnail thumbs/ *.jpg

  # Limit SubIFD nesting
  jpegmeta -api MaxDirectoryDepth=2 image.jpg
        """
    )
    parser.add_argument('files', nargs='+', help='JPEG file(s) to process')
    parser.add_argument('-j', '--json', action='store_true', help='Output metadata in JSON format')
    parser.add_argument('-csv', action='store_true', help='Output metadata in CSV format')
    parser.add_argument('-thumbnail', type=Path, metavar='DIR', help='Write embedded EXIF thumbnails to DIR')
    parser.add_argument('-api', type=str, action='append', help='Set API option (format: OPT=VAL)')
    parser.add_argument('-q', '--quiet', action='store_true', help='Quiet mode, only log errors')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose (debug) logging')
    parser.add_argument('-V', '--version', action='version', version=f"jpegmeta {__version__}")
    return parser


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line tool.

    Returns:
        Exit status: 0 on success, 1 if any file failed
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    format_type = "json" if args.json else "csv" if args.csv else "text"

    try:
        extractor = MetadataExtractor(parse_api_options(args.api))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    status = 0
    for index, name in enumerate(args.files):
        file_path = Path(name)
        try:
            result = extractor.parse(read_file_bytes(file_path))
        except OSError as e:
            print(f"Error: {file_path}: {e.strerror or e}", file=sys.stderr)
            status = 1
            continue
        except JPEGMetaError as e:
            print(f"Error: {file_path}: {e.message}", file=sys.stderr)
            status = 1
            continue

        if len(args.files) > 1 and format_type == "text":
            if index:
                print()
            print(f"======== {file_path}")
        print(format_output(result.flatten(), format_type))

        if args.thumbnail is not None and result.thumbnail is not None:
            output_path = write_thumbnail(result.thumbnail, file_path, args.thumbnail)
            logger.info("Wrote thumbnail %s", output_path)

    return status


if __name__ == "__main__":
    sys.exit(main())
