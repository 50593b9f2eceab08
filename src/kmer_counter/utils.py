from .types import InvalidBaseError

_BASES = b"ACGT"
_COMPLEMENT = bytes.maketrans(b"ACGT", b"TGCA")
_STR_COMPLEMENT = str.maketrans("ACGT", "TGCA")


def reverse_complement(kmer):
    """
    Return the reverse complement of a nucleotide string.

    Bases are reversed and exchanged under A<->T, C<->G. Only upper-case
    A, C, G and T are accepted.

    :param kmer: Sequence as ``bytes`` or ``str``.
    :returns: Reverse complement of the same type as the input.
    :raises InvalidBaseError: If any character is not one of A, C, G, T.
    """
    if isinstance(kmer, str):
        for base in kmer:
            if base not in "ACGT":
                raise InvalidBaseError(kmer, base)
        return kmer.translate(_STR_COMPLEMENT)[::-1]

    invalid = kmer.translate(None, _BASES)
    if invalid:
        raise InvalidBaseError(
            kmer.decode("utf-8", errors="replace"), chr(invalid[0])
        )
    return kmer.translate(_COMPLEMENT)[::-1]


def count_windows(record: bytes, k: int, counts, with_reverse=False) -> int:
    """
    Count every length-k window of a record into ``counts``.

    Windows overlap with stride 1. When ``with_reverse`` is set, the reverse
    complement of each window is counted as a separate key.

    :param record: Sequence bytes.
    :param k: Window length.
    :param counts: Mapping of k-mer to count, updated in place.
    :param with_reverse: Also count reverse complements.
    :returns: Number of windows scanned (0 if the record is shorter than k).
    """
    n_windows = len(record) - k + 1
    if n_windows <= 0:
        return 0

    get = counts.get
    for start in range(n_windows):
        kmer = record[start:start + k]
        counts[kmer] = get(kmer, 0) + 1
        if with_reverse:
            rc = reverse_complement(kmer)
            counts[rc] = get(rc, 0) + 1
    return n_windows
