import gzip
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Mapping, TextIO

from .types import SequenceFormat, UnknownFormatError


_FASTQ_SUFFIXES = (".fastq", ".fq")
_FASTA_SUFFIXES = (".fasta", ".fa")


class _State(Enum):
    OUTSIDE = 0
    IN_SEQUENCE = 1
    SKIP_NEXT_LINE = 2


def detect_formats(path) -> frozenset[SequenceFormat]:
    """
    Return every record syntax named in the lower-cased path.

    ``.fa`` is a substring of ``.fastq``, so FASTQ paths usually carry both.
    """
    name = str(path).lower()
    formats = set()
    if any(suffix in name for suffix in _FASTA_SUFFIXES):
        formats.add(SequenceFormat.FASTA)
    if any(suffix in name for suffix in _FASTQ_SUFFIXES):
        formats.add(SequenceFormat.FASTQ)
    if not formats:
        raise UnknownFormatError(str(path))
    return frozenset(formats)


def detect_format(path) -> SequenceFormat:
    """Infer FASTA or FASTQ syntax from the path, preferring FASTQ."""
    formats = detect_formats(path)
    if SequenceFormat.FASTQ in formats:
        return SequenceFormat.FASTQ
    return SequenceFormat.FASTA


def is_gzipped(path) -> bool:
    return str(path).lower().endswith(".gz")


def open_sequence_file(path) -> BinaryIO:
    """Open a sequence file for binary reading, decompressing ``.gz`` files."""
    if is_gzipped(path):
        return gzip.open(path, "rb")
    return open(path, "rb")


class SequenceReader:
    """
    A FASTA/FASTQ reader that yields one ``bytes`` object per record.

    A line starting with ``>`` opens a record when the path names FASTA, and a
    line starting with ``@`` when it names FASTQ. Multi-line sequences are
    joined. For FASTQ, a ``+`` line ends the sequence and the single line after
    it (the quality string) is skipped. Records with no sequence bytes are not
    emitted.
    """
    def __init__(self, path, fmt: SequenceFormat | None = None):
        self.path = Path(path)
        if fmt is not None:
            self.formats = frozenset([fmt])
            self.format = fmt
        else:
            self.formats = detect_formats(self.path)
            self.format = detect_format(self.path)
        self.total = 0
        self.lines = 0

    def __iter__(self):
        fastq = SequenceFormat.FASTQ in self.formats
        markers = tuple(
            marker
            for fmt, marker in ((SequenceFormat.FASTA, b">"), (SequenceFormat.FASTQ, b"@"))
            if fmt in self.formats
        )
        state = _State.OUTSIDE
        current = bytearray()

        with open_sequence_file(self.path) as handle:
            for raw in handle:
                self.lines += 1
                if state is _State.SKIP_NEXT_LINE:
                    state = _State.OUTSIDE
                    continue

                line = raw.removesuffix(b"\n").removesuffix(b"\r")
                if line.startswith(markers):
                    if current:
                        yield self._emit(current)
                        current = bytearray()
                    state = _State.IN_SEQUENCE
                elif state is _State.IN_SEQUENCE:
                    if fastq and line.startswith(b"+"):
                        state = _State.SKIP_NEXT_LINE
                    else:
                        current += line

        if current:
            yield self._emit(current)

    def _emit(self, current: bytearray) -> bytes:
        self.total += 1
        return bytes(current)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        pass


def read_sequences(path, fmt: SequenceFormat | None = None) -> list[bytes]:
    """Return all records of a FASTA/FASTQ file, in file order."""
    with SequenceReader(path, fmt) as reader:
        return list(reader)


def decode_counts(counts: Mapping[bytes, int]) -> dict[str, int]:
    """
    Key counts by their UTF-8 text, merging k-mers that decode alike.

    Undecodable bytes become U+FFFD, so distinct raw k-mers can share a key.
    """
    decoded: dict[str, int] = {}
    for kmer, count in counts.items():
        text = kmer.decode("utf-8", errors="replace")
        decoded[text] = decoded.get(text, 0) + count
    return decoded


def write_count_table(
    counts: Mapping[bytes, int], handle: TextIO, input_file: str, k: int
) -> None:
    """Write a k-mer count table as ``<kmer> <count>`` lines after a command header."""
    handle.write(f"# Command: kmer_counter {input_file} -k {k}\n")
    for kmer, count in decode_counts(counts).items():
        handle.write(f"{kmer} {count}\n")
