from .counter import count_kmers, count_records, partition_records, resolve_workers
from .io import (
    SequenceReader,
    decode_counts,
    detect_format,
    detect_formats,
    open_sequence_file,
    read_sequences,
    write_count_table,
)
from .types import InvalidBaseError, KmerTally, SequenceFormat, UnknownFormatError
from .utils import count_windows, reverse_complement

__all__ = [
    "InvalidBaseError",
    "KmerTally",
    "SequenceFormat",
    "SequenceReader",
    "UnknownFormatError",
    "count_kmers",
    "count_records",
    "count_windows",
    "decode_counts",
    "detect_format",
    "detect_formats",
    "open_sequence_file",
    "partition_records",
    "read_sequences",
    "resolve_workers",
    "reverse_complement",
    "write_count_table",
]
