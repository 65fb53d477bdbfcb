"""Tests for service layer."""

import asyncio

import pytest

from shortlinks.errors import (
    BackendUnavailableError,
    IncompleteURLError,
    InvalidURLError,
    RepositoryError,
    UIDConflictError,
    URLConflictError,
)
from shortlinks.repository import BatchLink, InMemoryShortlinkRepository
from shortlinks.service import ShortenerService
from shortlinks.shortcode import ShortCodeGenerator

FLUSH_INTERVAL = 0.05


class ScriptedGenerator(ShortCodeGenerator):
    """Hands out a fixed sequence of codes."""

    def __init__(self, codes):
        super().__init__()
        self.codes = list(codes)
        self.requested_lengths = []

    def generate(self, length=0):
        self.requested_lengths.append(length)
        return self.codes.pop(0)


class FailingRepository(InMemoryShortlinkRepository):
    async def ping(self):
        raise RepositoryError("ping")

    async def save_batch(self, links):
        raise RepositoryError("save shortlinks")


def make_service(repository, batch_processor, generator):
    return ShortenerService(
        repository=repository,
        batch_processor=batch_processor,
        base_url="http://testserver/",
        short_code_generator=generator,
    )


@pytest.mark.asyncio
class TestShortenerService:
    """Test shortener service."""

    async def test_create_one(self, service, sample_urls):
        """Test creating a short URL."""
        link = await service.create_one("owner-a", sample_urls[0])

        assert link.long == sample_urls[0]
        assert link.owner_id == "owner-a"
        assert link.short == f"http://testserver/{link.uid}"
        assert not link.deleted

    async def test_resolve_returns_long_url(self, service, sample_urls):
        """Test the created link resolves to the submitted URL."""
        for url in sample_urls:
            link = await service.create_one("owner-a", url)
            resolved = await service.resolve(link.uid)
            assert resolved.long == url

    async def test_resolve_unknown(self, service):
        assert await service.resolve("nonexistent") is None

    @pytest.mark.parametrize("length,expected", [(0, 6), (-3, 6), (4, 4), (12, 12)])
    async def test_uid_length(self, service, length, expected):
        link = await service.create_one("owner-a", f"https://example.com/{length}", length=length)

        assert len(link.uid) == expected

    async def test_invalid_url(self, service, repository):
        """Test unparsable URL rejection."""
        with pytest.raises(InvalidURLError):
            await service.create_one("owner-a", "http://[::1")

        assert await repository.list("owner-a") == []

    async def test_incomplete_url(self, service, repository):
        """Test URL without scheme or host."""
        with pytest.raises(IncompleteURLError):
            await service.create_one("owner-a", "example.org")

        assert await repository.list("owner-a") == []

    async def test_url_conflict_returns_existing_link(self, service, sample_urls):
        first = await service.create_one("owner-a", sample_urls[0])

        with pytest.raises(URLConflictError) as exc_info:
            await service.create_one("owner-b", sample_urls[0])

        assert exc_info.value.link.short == first.short
        assert exc_info.value.link.uid == first.uid

    async def test_collision_retry(self, repository, batch_processor):
        generator = ScriptedGenerator(["taken", "taken", "taken", "fresh"])
        service = make_service(repository, batch_processor, generator)
        await service.create_one("owner-a", "https://example.com/first")

        link = await service.create_one("owner-b", "https://example.com/second")

        assert link.uid == "fresh"
        assert link.short == "http://testserver/fresh"

    async def test_collision_across_owners(self, repository, batch_processor):
        generator = ScriptedGenerator(["same", "same", "other"])
        service = make_service(repository, batch_processor, generator)
        await service.create_one("owner-a", "https://example.com/a")

        link = await service.create_one("owner-b", "https://example.com/b")

        assert link.uid == "other"

    async def test_uid_conflict_after_three_attempts(self, repository, batch_processor):
        generator = ScriptedGenerator(["x"] * 4 + ["never"])
        service = make_service(repository, batch_processor, generator)
        await service.create_one("owner-a", "https://example.com/a")

        with pytest.raises(UIDConflictError):
            await service.create_one("owner-a", "https://example.com/b")

        assert generator.codes == ["never"]

    async def test_create_batch(self, service, repository):
        links = [
            BatchLink(url=f"https://example.com/page/{i}", correlation_id=f"corr-{i}")
            for i in range(10)
        ]

        created = await service.create_batch("owner-a", links)

        assert len(created) == 10
        assert [link.correlation_id for link in created] == [f"corr-{i}" for i in range(10)]
        assert [link.long for link in created] == [item.url for item in links]
        assert len({link.uid for link in created}) == 10
        assert len(await repository.list("owner-a")) == 10

    async def test_create_batch_keeps_correlation_id_of_existing_url(self, service):
        await service.create_one("owner-a", "https://example.com/x")

        created = await service.create_batch("owner-b", [
            BatchLink(url="https://example.com/x", correlation_id="c1"),
            BatchLink(url="https://example.com/y", correlation_id="c2"),
        ])

        assert [link.correlation_id for link in created] == ["c1", "c2"]
        assert [link.long for link in created] == ["https://example.com/x", "https://example.com/y"]

    async def test_create_batch_empty(self, service):
        assert await service.create_batch("owner-a", []) == []

    async def test_create_batch_invalid_url_aborts(self, service, repository):
        links = [
            BatchLink(url="https://example.com/ok", correlation_id="1"),
            BatchLink(url="example.org", correlation_id="2"),
            BatchLink(url="https://example.com/also-ok", correlation_id="3"),
        ]

        with pytest.raises(IncompleteURLError):
            await service.create_batch("owner-a", links)

        assert await repository.list("owner-a") == []

    async def test_create_batch_regenerates_colliding_uids(self, repository, batch_processor):
        generator = ScriptedGenerator(["taken", "taken", "dup", "dup", "free1", "free2"])
        service = make_service(repository, batch_processor, generator)
        await service.create_one("owner-a", "https://example.com/existing")

        created = await service.create_batch("owner-b", [
            BatchLink(url="https://example.com/1", correlation_id="1"),
            BatchLink(url="https://example.com/2", correlation_id="2"),
            BatchLink(url="https://example.com/3", correlation_id="3"),
        ])

        # Round 1: "taken" collides with the stored link, second "dup" with the first
        assert [link.uid for link in created] == ["free1", "dup", "free2"]
        assert [link.correlation_id for link in created] == ["1", "2", "3"]
        assert [link.short for link in created] == [
            "http://testserver/free1",
            "http://testserver/dup",
            "http://testserver/free2",
        ]

    async def test_create_batch_uid_conflict(self, repository, batch_processor):
        generator = ScriptedGenerator(["same"] * 10)
        service = make_service(repository, batch_processor, generator)

        with pytest.raises(UIDConflictError):
            await service.create_batch("owner-a", [
                BatchLink(url="https://example.com/1"),
                BatchLink(url="https://example.com/2"),
            ])

        assert await repository.list("owner-a") == []

    async def test_create_batch_passes_length(self, repository, batch_processor):
        generator = ScriptedGenerator(["aaaa", "bbbb"])
        service = make_service(repository, batch_processor, generator)

        await service.create_batch("owner-a", [
            BatchLink(url="https://example.com/1"),
            BatchLink(url="https://example.com/2"),
        ], length=4)

        assert generator.requested_lengths == [4, 4]

    async def test_create_batch_persistence_failure(self, batch_processor):
        service = make_service(FailingRepository(), batch_processor, ShortCodeGenerator())

        with pytest.raises(RepositoryError):
            await service.create_batch("owner-a", [BatchLink(url="https://example.com/1")])

    async def test_get_owned(self, service, sample_urls):
        link = await service.create_one("owner-a", sample_urls[0])

        assert await service.get_owned("owner-a", link.uid) == link
        assert await service.get_owned("owner-b", link.uid) is None

    async def test_list(self, service, sample_urls):
        for url in sample_urls:
            await service.create_one("owner-a", url)
        await service.create_one("owner-b", "https://example.com/other-owner")

        owned = await service.list("owner-a")

        assert sorted(link.long for link in owned) == sorted(sample_urls)
        assert await service.list("nobody") == []

    async def test_delete_many_is_asynchronous(self, service, sample_urls):
        link = await service.create_one("owner-a", sample_urls[0])

        await service.delete_many("owner-a", [link.uid])

        # Nothing is deleted until the processor flushes
        assert not (await service.resolve(link.uid)).deleted

        await asyncio.sleep(FLUSH_INTERVAL * 4)

        assert (await service.resolve(link.uid)).deleted
        assert await service.list("owner-a") == []
        assert await service.get_owned("owner-a", link.uid) is None

    async def test_delete_many_ignores_other_owners_links(self, service, sample_urls):
        link = await service.create_one("owner-a", sample_urls[0])

        await service.delete_many("owner-b", [link.uid])
        await asyncio.sleep(FLUSH_INTERVAL * 4)

        assert not (await service.resolve(link.uid)).deleted

    async def test_delete_many_empty(self, service):
        await service.delete_many("owner-a", [])

    async def test_ping(self, service):
        await service.ping()

    async def test_ping_failure(self, batch_processor):
        service = make_service(FailingRepository(), batch_processor, ShortCodeGenerator())

        with pytest.raises(BackendUnavailableError):
            await service.ping()

    async def test_close_backs_up_repository(self, service, sample_urls, snapshot_path):
        await service.create_one("owner-a", sample_urls[0])

        await service.close()

        restored = InMemoryShortlinkRepository(snapshot=service.repository.snapshot)
        await restored.restore()
        assert [link.long for link in await restored.list("owner-a")] == [sample_urls[0]]
