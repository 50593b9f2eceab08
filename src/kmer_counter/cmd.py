import argparse
import sys
import time
from pathlib import Path
from typing import TextIO

from .counter import count_kmers, resolve_workers
from .io import read_sequences, write_count_table
from .types import KmerTally


def report_summary(
    tally: KmerTally, workers: int, k: int, stream: TextIO | None = None
) -> None:
    """Print discarded records and run totals as diagnostic lines."""
    stream = stream if stream is not None else sys.stderr
    for length in tally.discarded:
        print(
            f"Discarding short sequence with length: {length} "
            f"(less than k-mer size: {k})",
            file=stream,
        )
    print(f"Total length of input sequences: {tally.scanned_length}", file=stream)
    print(f"Total number of windows scanned: {tally.windows}", file=stream)
    print(f"Total number of k-mers counted: {tally.total_kmers}", file=stream)
    print(f"Number of distinct k-mers: {tally.distinct_kmers}", file=stream)
    print(f"Using {workers} CPU cores", file=stream)


def run_count(args: argparse.Namespace) -> None:
    """Count k-mers in a FASTA/FASTQ file and write the frequency table."""
    start = time.time()
    input_path = Path(args.input_file)
    k = args.kmer_size

    print("Reading sequences...", file=sys.stderr)
    records = read_sequences(input_path)
    print(
        f"Finished reading sequences. Sequences count: {len(records)}",
        file=sys.stderr,
    )

    workers = resolve_workers(args.cpu_count)
    tally = count_kmers(records, k, args.count_reverse_complement, workers)
    report_summary(tally, workers, k)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as handle:
            write_count_table(tally.counts, handle, args.input_file, k)
        print(f"Wrote k-mer table to {output_path}", file=sys.stderr)
    else:
        write_count_table(tally.counts, sys.stdout, args.input_file, k)

    print(f"Time elapsed: {time.time() - start:.2g} seconds", file=sys.stderr)
