import argparse
from typing import Sequence

from .cmd import run_count


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kmer_counter",
        description="Count k-mers in a FASTA or FASTQ file (optionally gzip-compressed)",
    )
    parser.add_argument("input_file", help="Input FASTA or FASTQ file")
    parser.add_argument(
        "-k", "--kmer-size", type=positive_int, default=9, help="Size of k-mers to count"
    )
    parser.add_argument(
        "-c",
        "--cpu-count",
        type=non_negative_int,
        default=0,
        help="Number of CPU cores to use (0 uses all available cores)",
    )
    parser.add_argument(
        "-r",
        "--count-reverse-complement",
        action="store_true",
        help="Count reverse complement k-mers as well",
    )
    parser.add_argument(
        "-o", "--output", default=None, help="Write the table here instead of stdout"
    )
    parser.set_defaults(func=run_count)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except (OSError, EOFError, ValueError) as exc:
        parser.exit(1, f"{parser.prog}: error: {exc}\n")


if __name__ == "__main__":
    main()
