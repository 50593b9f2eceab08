import gzip
import io

import pytest

from kmer_counter import (
    SequenceFormat,
    SequenceReader,
    UnknownFormatError,
    decode_counts,
    detect_format,
    detect_formats,
    read_sequences,
    write_count_table,
)


def write(path, text):
    path.write_bytes(text.encode("ascii"))
    return path


@pytest.mark.parametrize("name,expected", [
    ("reads.fastq", SequenceFormat.FASTQ),
    ("reads.fq", SequenceFormat.FASTQ),
    ("READS.FQ.GZ", SequenceFormat.FASTQ),
    ("sample.fastq.gz", SequenceFormat.FASTQ),
    ("genome.fa", SequenceFormat.FASTA),
    ("genome.fasta", SequenceFormat.FASTA),
    ("Genome.FASTA.gz", SequenceFormat.FASTA),
    ("contigs.fa.txt", SequenceFormat.FASTA),
])
def test_detect_format(name, expected):
    """Test format detection from file name substrings."""
    assert detect_format(name) is expected


def test_detect_format_unknown():
    """Test that unrecognized names are a configuration error."""
    with pytest.raises(UnknownFormatError) as excinfo:
        detect_format("sequences.txt")
    assert "sequences.txt" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


def test_detect_formats_fastq_name_also_matches_fasta():
    """Test that ".fastq" names carry both syntaxes, since they contain ".fa"."""
    assert detect_formats("reads.fastq") == {SequenceFormat.FASTA, SequenceFormat.FASTQ}
    assert detect_formats("reads.fq") == {SequenceFormat.FASTQ}
    assert detect_formats("genome.fasta") == {SequenceFormat.FASTA}


def test_detect_format_uses_whole_path():
    """Test that directory names take part in format detection."""
    assert detect_format("runs.fastq/x.txt") is SequenceFormat.FASTQ
    assert detect_formats("data.fa/sequences.txt") == {SequenceFormat.FASTA}
    with pytest.raises(UnknownFormatError):
        detect_format("data/sequences.txt")


def test_fasta_multiline(tmp_path):
    """Test that multi-line FASTA records are joined."""
    path = write(tmp_path / "a.fa", ">s1 first\nACGT\nAC\n>s2\nGG\n")
    assert read_sequences(path) == [b"ACGTAC", b"GG"]


def test_fasta_skips_empty_records(tmp_path):
    """Test that headers without sequence produce no record."""
    path = write(tmp_path / "a.fasta", ">empty\n>full\nAC\n>trailing\n")
    assert read_sequences(path) == [b"AC"]


def test_fasta_ignores_lines_before_first_header(tmp_path):
    """Test that text before the first header is not part of a record."""
    path = write(tmp_path / "a.fa", "junk\nTTTT\n>s1\nAC\n")
    assert read_sequences(path) == [b"AC"]


def test_fasta_without_trailing_newline(tmp_path):
    """Test that the final record is flushed at EOF."""
    path = write(tmp_path / "a.fa", ">s1\nACGT\n>s2\nTTGA")
    assert read_sequences(path) == [b"ACGT", b"TTGA"]


def test_fasta_crlf_line_endings(tmp_path):
    """Test that Windows line endings are stripped."""
    path = write(tmp_path / "a.fa", ">s1\r\nACGT\r\nGG\r\n")
    assert read_sequences(path) == [b"ACGTGG"]


def test_only_one_line_terminator_is_removed(tmp_path):
    """Test that a single "\\n" or "\\r\\n" is stripped and other bytes are kept."""
    path = write(tmp_path / "a.fa", ">s1\nAC\r\r\nGT\r\n")
    assert read_sequences(path) == [b"AC\rGT"]


def test_fasta_keeps_raw_bytes(tmp_path):
    """Test that sequence lines are not validated or normalized."""
    path = write(tmp_path / "a.fa", ">s1\nacgN\n")
    assert read_sequences(path) == [b"acgN"]


def test_fastq_records(tmp_path):
    """Test that FASTQ quality lines are skipped, even when they look like headers."""
    path = write(
        tmp_path / "r.fastq",
        "@r1\nACGT\n+\n@@II\n@r2\nGGCC\n+r2\n+III\n",
    )
    assert read_sequences(path) == [b"ACGT", b"GGCC"]


def test_fastq_name_accepts_fasta_headers(tmp_path):
    """Test that ">" opens a record in a .fastq file, whose name also contains ".fa"."""
    path = write(tmp_path / "reads.fastq", ">s1\nACGT\n@r2\nGG\n+\nII\n>s3\nTT\n")
    assert read_sequences(path) == [b"ACGT", b"GG", b"TT"]


def test_fq_name_ignores_fasta_headers(tmp_path):
    """Test that ">" is not a record marker when only FASTQ is named."""
    path = write(tmp_path / "r.fq", "@r1\nAC\n+\nII\n>not a header\n")
    assert read_sequences(path) == [b"AC"]


def test_fasta_plus_line_is_sequence(tmp_path):
    """Test that '+' has no special meaning in FASTA."""
    path = write(tmp_path / "a.fa", ">s1\nAC\n+GT\n")
    assert read_sequences(path) == [b"AC+GT"]


def test_reader_counters(tmp_path):
    """Test that the reader tracks records and lines."""
    path = write(tmp_path / "r.fq", "@r1\nACGT\n+\nIIII\n@r2\nGG\n+\nII\n")
    with SequenceReader(path) as reader:
        records = list(reader)
    assert len(records) == 2
    assert reader.total == 2
    assert reader.lines == 8
    assert reader.format is SequenceFormat.FASTQ


def test_explicit_format_overrides_name(tmp_path):
    """Test that a format given explicitly skips name detection."""
    path = write(tmp_path / "reads.txt", ">s1\nACGT\n")
    assert read_sequences(path, SequenceFormat.FASTA) == [b"ACGT"]


def test_gzip_matches_plain(tmp_path):
    """Test that gzip-compressed input yields the same records."""
    text = ">s1\nACGTACGT\n>s2\nTTGACC\nA\n"
    plain = write(tmp_path / "x.fa", text)
    compressed = tmp_path / "x.fa.GZ"
    with gzip.open(compressed, "wb") as handle:
        handle.write(text.encode("ascii"))
    assert read_sequences(compressed) == read_sequences(plain)


def test_missing_file(tmp_path):
    """Test that a missing file raises an I/O error."""
    with pytest.raises(FileNotFoundError):
        read_sequences(tmp_path / "missing.fa")


def test_corrupt_gzip(tmp_path):
    """Test that non-gzip data behind a .gz name raises an I/O error."""
    path = write(tmp_path / "bad.fa.gz", ">s1\nACGT\n")
    with pytest.raises(OSError):
        read_sequences(path)


def test_write_count_table():
    """Test the header and row format of the count table."""
    handle = io.StringIO()
    write_count_table({b"ACGT": 2, b"CGTA": 1}, handle, "in.fa", 4)
    assert handle.getvalue().splitlines() == [
        "# Command: kmer_counter in.fa -k 4",
        "ACGT 2",
        "CGTA 1",
    ]


def test_decode_counts_merges_lossy_keys():
    """Test that k-mers decoding to the same text share one entry."""
    assert decode_counts({b"\xff": 1, b"\xfe": 2, b"AC": 3}) == {"�": 3, "AC": 3}


def test_write_count_table_unique_rows():
    """Test that undecodable k-mers are written once with their combined count."""
    handle = io.StringIO()
    write_count_table({b"\xff": 1, b"\xfe": 1}, handle, "in.fa", 1)
    assert handle.getvalue().splitlines()[1:] == ["� 2"]
