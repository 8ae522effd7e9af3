"""
cli.py : compress and restore files with Huffman coding or LZW

Usage:
    bytesqueeze compress report.txt data.bin -m both     # writes report.txt.bsq, data.bin.bsq
    bytesqueeze decompress report.txt.bsq -o restored/   # writes restored/report.txt
    bytesqueeze stats report.txt                         # compares both methods

Every file is processed on its own: a failure is reported and the
batch moves on to the next file.
"""
import argparse
from pathlib import Path
from typing import Optional

from bytesqueeze.compressors import get_compressor
from bytesqueeze.results import BOTH, HUFFMAN, LZW
from bytesqueeze.selector import choose_best_compression, compress_data

SUFFIX = ".bsq"
RESTORED_SUFFIX = ".out"


def output_path(source: Path, out_dir: Optional[Path], compressing: bool) -> Path:
    """Where the result for source is written."""
    if compressing:
        name = source.name + SUFFIX
    elif source.suffix == SUFFIX:
        name = source.stem
    else:
        name = source.name + RESTORED_SUFFIX
    return (out_dir or source.parent) / name


def run_compress(args) -> int:
    compressor_cls = get_compressor(args.method)
    failures = 0
    for path in args.files:
        target = output_path(path, args.output, compressing=True)
        try:
            log_info = compressor_cls.compress_file(str(path), str(target), verbose=args.verbose)
        except (OSError, ValueError) as exc:
            print(f"[warn] failed to compress {path}: {exc}")
            failures += 1
            continue
        print(f"{path} -> {target}")
        if not args.verbose:
            print(log_info)
    return 1 if failures else 0


def run_decompress(args) -> int:
    # the container records its own method, any compressor can read it
    compressor_cls = get_compressor(BOTH)
    failures = 0
    for path in args.files:
        target = output_path(path, args.output, compressing=False)
        try:
            log_info = compressor_cls.decompress_file(str(path), str(target), verbose=args.verbose)
        except (OSError, ValueError) as exc:
            print(f"[warn] failed to decompress {path}: {exc}")
            failures += 1
            continue
        print(f"{path} -> {target}")
        if not args.verbose:
            print(log_info)
    return 1 if failures else 0


def run_stats(args) -> int:
    failures = 0
    for path in args.files:
        try:
            data = path.read_bytes()
        except OSError as exc:
            print(f"[warn] failed to read {path}: {exc}")
            failures += 1
            continue

        results = compress_data(data, args.method)
        best = choose_best_compression(results)
        print(f"{path} ({len(data)} bytes)")
        for result in results:
            marker = "*" if result is best else " "
            state = "verbatim" if result.verbatim else "compressed"
            print(
                f" {marker} {result.method:<8} {result.compressed_size:>10} bytes  "
                f"ratio {result.ratio:.3f}  {state}"
            )
    return 1 if failures else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bytesqueeze",
        description="Lossless file compression with Huffman coding and LZW.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    compress = commands.add_parser("compress", help="compress files into .bsq containers")
    compress.add_argument("files", nargs="+", type=Path)
    compress.add_argument(
        "-m", "--method", choices=(HUFFMAN, LZW, BOTH), default=BOTH,
        help="algorithm to use; 'both' keeps the smaller result (default)"
    )
    compress.add_argument("-o", "--output", type=Path, help="directory for the output files")
    compress.add_argument("-v", "--verbose", action="store_true", help="print progress lines")
    compress.set_defaults(handler=run_compress)

    decompress = commands.add_parser("decompress", help="restore files from .bsq containers")
    decompress.add_argument("files", nargs="+", type=Path)
    decompress.add_argument("-o", "--output", type=Path, help="directory for the output files")
    decompress.add_argument("-v", "--verbose", action="store_true", help="print progress lines")
    decompress.set_defaults(handler=run_decompress)

    stats = commands.add_parser("stats", help="compare methods without writing files")
    stats.add_argument("files", nargs="+", type=Path)
    stats.add_argument("-m", "--method", choices=(HUFFMAN, LZW, BOTH), default=BOTH)
    stats.set_defaults(handler=run_stats)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if getattr(args, "output", None) is not None:
        args.output.mkdir(parents=True, exist_ok=True)
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
