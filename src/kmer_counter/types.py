from dataclasses import dataclass, field
from enum import Enum


class SequenceFormat(Enum):
    """Record syntax of a sequence file."""
    FASTA = "fasta"
    FASTQ = "fastq"


class UnknownFormatError(ValueError):
    """Raised when a file name does not identify FASTA or FASTQ content."""
    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return (
            f"Cannot determine sequence format of {self.path!r}: "
            f"expected .fasta/.fa or .fastq/.fq in the file name"
        )


class InvalidBaseError(ValueError):
    """Raised when a k-mer contains a character outside A, C, G, T."""
    def __init__(self, kmer: str, base: str):
        super().__init__(kmer, base)
        self.kmer = kmer
        self.base = base

    def __str__(self) -> str:
        return f"Invalid base in k-mer {self.kmer!r}: {self.base!r}"


@dataclass(slots=True)
class KmerTally:
    """Accumulated k-mer counts for a set of records."""
    counts: dict[bytes, int] = field(default_factory=dict)
    scanned_length: int = 0
    discarded: list[int] = field(default_factory=list)
    windows: int = 0

    @property
    def total_kmers(self) -> int:
        return sum(self.counts.values())

    @property
    def distinct_kmers(self) -> int:
        return len(self.counts)

    def merge(self, other: "KmerTally") -> "KmerTally":
        """Fold another tally into this one and return self."""
        counts = self.counts
        for kmer, count in other.counts.items():
            counts[kmer] = counts.get(kmer, 0) + count
        self.scanned_length += other.scanned_length
        self.windows += other.windows
        self.discarded.extend(other.discarded)
        return self
