"""Tests for reading documents and writing reports."""

from linediff.services.file_io import FileIOService, LineEnding


class TestReadFile:

    def test_reads_text(self, write_file):
        path = write_file("a.txt", "hello\nworld\n")
        result = FileIOService().read_file(path)
        assert result.success
        assert result.content.content == "hello\nworld\n"
        assert result.content.encoding == "utf-8"
        assert result.content.line_ending is LineEnding.LF
        assert result.content.document.lines == ("hello", "world", "")

    def test_utf8_bom_is_stripped(self, tmp_path):
        path = tmp_path / "bom.txt"
        path.write_bytes(b"\xef\xbb\xbfcaf\xc3\xa9\r\n")
        result = FileIOService().read_file(path)
        assert result.success
        assert result.content.bom
        assert result.content.content == "café\r\n"
        assert result.content.line_ending is LineEnding.CRLF

    def test_utf16_with_bom(self, write_file):
        path = write_file("wide.txt", "\ufeffabc\ndef", encoding="utf-16-le")
        result = FileIOService().read_file(path)
        assert result.success
        assert result.content.content == "abc\ndef"

    def test_forced_encoding(self, tmp_path):
        path = tmp_path / "latin.txt"
        path.write_bytes("naïve".encode("latin-1"))
        result = FileIOService().read_file(path, encoding="latin-1")
        assert result.content.content == "naïve"

    def test_missing_file(self, tmp_path):
        result = FileIOService().read_file(tmp_path / "nope.txt")
        assert not result.success
        assert "File not found" in result.error

    def test_directory_is_rejected(self, tmp_path):
        result = FileIOService().read_file(tmp_path)
        assert not result.success
        assert "Not a file" in result.error

    def test_binary_is_rejected(self, tmp_path):
        path = tmp_path / "blob.bin"
        path.write_bytes(b"abc\x00\x01\x02def")
        result = FileIOService().read_file(path)
        assert not result.success
        assert result.is_binary

    def test_size_limit(self, write_file):
        path = write_file("big.txt", "x" * 100)
        result = FileIOService().read_file(path, max_text_size=10)
        assert not result.success
        assert "too large" in result.error

    def test_empty_file(self, write_file):
        result = FileIOService().read_file(write_file("empty.txt", ""))
        assert result.success
        assert result.content.line_count == 0
        assert result.content.line_ending is LineEnding.NONE


class TestWriteText:

    def test_writes_and_replaces(self, tmp_path):
        path = tmp_path / "out" / "report.txt"
        service = FileIOService()
        assert service.write_text(path, "first").success
        result = service.write_text(path, "second\n")
        assert result.success
        assert result.bytes_written == 7
        assert path.read_text(encoding="utf-8") == "second\n"
        assert [p.name for p in path.parent.iterdir()] == ["report.txt"]

    def test_unencodable_text(self, tmp_path):
        result = FileIOService().write_text(tmp_path / "r.txt", "☃", encoding="ascii")
        assert not result.success
        assert "ascii" in result.error


class TestLineEndings:

    def test_mixed(self):
        assert FileIOService.detect_line_ending("a\r\nb\nc") is LineEnding.MIXED

    def test_cr(self):
        assert FileIOService.detect_line_ending("a\rb") is LineEnding.CR
