"""Test library processing and sidecar writing"""

from unittest.mock import Mock, patch

import pytest

from lyrics_finder.audio.metadata import TrackMetadata
from lyrics_finder.lyrics.models import LyricsResult, TrackStatus
from lyrics_finder.lyrics.processor import LyricsProcessor
from lyrics_finder.lyrics.resolver import LyricsResolver


def make_processor(metadata_reader, client):
    return LyricsProcessor(debug=True, metadata_reader=metadata_reader, client_factory=lambda: client)


class TestProcessFile:
    """Test processing of a single file"""

    @pytest.mark.asyncio
    async def test_writes_lyrics_verbatim(self, temp_dir, metadata_reader, make_client):
        """Test found lyrics are written unchanged next to the track"""
        text = "[00:01.00]Ünïcödé line\r\n[00:02.00]second\n"
        client = make_client(exact={"Test Artist": LyricsResult.synced(text)})
        audio = temp_dir / "song.flac"
        audio.write_bytes(b"")

        processor = make_processor(metadata_reader, client)
        status = await processor.process_file(audio, LyricsResolver(client))

        assert status is TrackStatus.WRITTEN
        assert (temp_dir / "song.lrc").read_bytes() == text.encode("utf-8")

    @pytest.mark.asyncio
    async def test_existing_sidecar_skips_lookup(self, temp_dir, metadata_reader, make_client):
        """Test an existing sidecar means no request and no write"""
        client = make_client(exact={"Test Artist": LyricsResult.plain("new")})
        audio = temp_dir / "song.flac"
        audio.write_bytes(b"")
        (temp_dir / "song.lrc").write_text("old", encoding="utf-8")

        processor = make_processor(metadata_reader, client)
        status = await processor.process_file(audio, LyricsResolver(client))

        assert status is TrackStatus.SKIPPED_EXISTING
        assert client.calls == []
        assert (temp_dir / "song.lrc").read_text(encoding="utf-8") == "old"

    @pytest.mark.asyncio
    async def test_unreadable_metadata_skips(self, temp_dir, make_client):
        """Test files without readable tags are skipped"""
        reader = Mock()
        reader.read_metadata.return_value = None
        client = make_client()
        audio = temp_dir / "broken.flac"
        audio.write_bytes(b"")

        status = await make_processor(reader, client).process_file(audio, LyricsResolver(client))

        assert status is TrackStatus.SKIPPED_NO_METADATA
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_incomplete_metadata_skips(self, temp_dir, make_client):
        """Test files missing a title or artist are skipped"""
        reader = Mock()
        reader.read_metadata.return_value = TrackMetadata(title="", artist="Artist", album="Album")
        client = make_client()
        audio = temp_dir / "untitled.flac"
        audio.write_bytes(b"")

        status = await make_processor(reader, client).process_file(audio, LyricsResolver(client))

        assert status is TrackStatus.SKIPPED_INCOMPLETE
        assert client.calls == []
        assert not (temp_dir / "untitled.lrc").exists()

    @pytest.mark.asyncio
    async def test_not_found_writes_nothing(self, temp_dir, metadata_reader, make_client):
        """Test tracks without lyrics leave no sidecar behind"""
        client = make_client()
        audio = temp_dir / "song.flac"
        audio.write_bytes(b"")

        status = await make_processor(metadata_reader, client).process_file(audio, LyricsResolver(client))

        assert status is TrackStatus.NOT_FOUND
        assert not (temp_dir / "song.lrc").exists()

    @pytest.mark.asyncio
    async def test_instrumental_writes_nothing(self, temp_dir, metadata_reader, make_client):
        """Test instrumental tracks are reported and leave no sidecar"""
        client = make_client(exact={"Test Artist": LyricsResult.instrumental()})
        audio = temp_dir / "song.flac"
        audio.write_bytes(b"")

        status = await make_processor(metadata_reader, client).process_file(audio, LyricsResolver(client))

        assert status is TrackStatus.INSTRUMENTAL
        assert not (temp_dir / "song.lrc").exists()

    @pytest.mark.asyncio
    async def test_write_failure(self, temp_dir, metadata_reader, make_client):
        """Test a failed write is reported without raising"""
        client = make_client(exact={"Test Artist": LyricsResult.plain("words")})
        audio = temp_dir / "song.flac"
        audio.write_bytes(b"")

        processor = make_processor(metadata_reader, client)
        with patch.object(processor, 'write_lyrics', side_effect=PermissionError("read-only")):
            status = await processor.process_file(audio, LyricsResolver(client))

        assert status is TrackStatus.FAILED

    @pytest.mark.asyncio
    async def test_unencodable_text_leaves_no_sidecar(self, temp_dir, metadata_reader, make_client):
        """Test text that is not valid UTF-8 fails the track without creating a file"""
        client = make_client(exact={"Test Artist": LyricsResult.plain("bad \ud800 text")})
        audio = temp_dir / "song.flac"
        audio.write_bytes(b"")

        status = await make_processor(metadata_reader, client).process_file(audio, LyricsResolver(client))

        assert status is TrackStatus.FAILED
        assert sorted(path.name for path in temp_dir.iterdir()) == ["song.flac"]

    @pytest.mark.asyncio
    async def test_interrupted_write_leaves_no_sidecar(self, temp_dir, metadata_reader, make_client):
        """Test a write that fails midway leaves neither a partial sidecar nor a temp file"""
        client = make_client(exact={"Test Artist": LyricsResult.plain("words")})
        audio = temp_dir / "song.flac"
        audio.write_bytes(b"")

        processor = make_processor(metadata_reader, client)
        with patch('lyrics_finder.lyrics.processor.os.replace', side_effect=OSError("No space left on device")):
            status = await processor.process_file(audio, LyricsResolver(client))

        assert status is TrackStatus.FAILED
        assert sorted(path.name for path in temp_dir.iterdir()) == ["song.flac"]

        # The next run retries the track instead of skipping it
        status = await processor.process_file(audio, LyricsResolver(client))
        assert status is TrackStatus.WRITTEN
        assert (temp_dir / "song.lrc").read_text(encoding="utf-8") == "words"


class TestProcessDirectory:
    """Test whole-library runs"""

    def test_run(self, temp_dir, make_client):
        """Test a run over a nested library"""
        (temp_dir / "Album").mkdir()
        for name in ["Album/01.flac", "Album/02.FLAC", "Album/cover.jpg", "03.flac"]:
            (temp_dir / name).write_bytes(b"")

        reader = Mock()
        reader.read_metadata.side_effect = lambda path: TrackMetadata(
            title=path.stem, artist="Artist", album="Album"
        )
        client = make_client(exact={"Artist": LyricsResult.synced("[00:01.00]la")})

        stats = make_processor(reader, client).run(temp_dir)

        assert stats.total == 3
        assert stats.written == 3
        assert (temp_dir / "Album" / "01.lrc").read_text(encoding="utf-8") == "[00:01.00]la"
        assert (temp_dir / "Album" / "02.lrc").exists()
        assert (temp_dir / "03.lrc").exists()
        assert not (temp_dir / "Album" / "cover.lrc").exists()

    def test_rerun_makes_no_requests(self, temp_dir, metadata_reader, make_client):
        """Test a second run over the same library is a no-op"""
        (temp_dir / "song.flac").write_bytes(b"")
        client = make_client(exact={"Test Artist": LyricsResult.plain("words")})
        processor = make_processor(metadata_reader, client)

        first = processor.run(temp_dir)
        calls_after_first = len(client.calls)
        second = processor.run(temp_dir)

        assert first.written == 1
        assert second.counts[TrackStatus.SKIPPED_EXISTING] == 1
        assert len(client.calls) == calls_after_first

    def test_run_continues_after_failures(self, temp_dir, make_client):
        """Test one bad file does not stop the run"""
        for name in ["a.flac", "b.flac"]:
            (temp_dir / name).write_bytes(b"")

        reader = Mock()
        reader.read_metadata.side_effect = [
            None,
            TrackMetadata(title="B", artist="Artist"),
        ]
        client = make_client(search=LyricsResult.plain("found by search"))

        stats = make_processor(reader, client).run(temp_dir)

        assert stats.counts[TrackStatus.SKIPPED_NO_METADATA] == 1
        assert stats.written == 1
        assert (temp_dir / "b.lrc").read_text(encoding="utf-8") == "found by search"

    def test_run_continues_after_unencodable_lyrics(self, temp_dir, make_client):
        """Test one undecodable payload fails its track and the rest of the run proceeds"""
        for name in ["a.flac", "b.flac"]:
            (temp_dir / name).write_bytes(b"")

        reader = Mock()
        reader.read_metadata.side_effect = lambda path: TrackMetadata(title=path.stem, artist=path.stem)
        client = make_client(exact={
            "a": LyricsResult.plain("bad \ud800 text"),
            "b": LyricsResult.plain("good text"),
        })

        stats = make_processor(reader, client).run(temp_dir)

        assert stats.counts[TrackStatus.FAILED] == 1
        assert stats.written == 1
        assert not (temp_dir / "a.lrc").exists()
        assert (temp_dir / "b.lrc").read_text(encoding="utf-8") == "good text"

    def test_empty_library(self, temp_dir, make_client):
        """Test an empty directory completes without requests"""
        client = make_client()

        stats = LyricsProcessor(metadata_reader=Mock(), client_factory=lambda: client).run(temp_dir)

        assert stats.total == 0
        assert client.calls == []

    def test_missing_directory(self, temp_dir, metadata_reader, make_client):
        """Test a missing library root is an error"""
        with pytest.raises(OSError):
            make_processor(metadata_reader, make_client()).run(temp_dir / "missing")
