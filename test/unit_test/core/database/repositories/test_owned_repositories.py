"""Unit tests for ownership-scoped repositories (prayers, notes, settings, media, donations)."""

from __future__ import annotations

from bibliafs.core.database.entities.donations import Donation
from bibliafs.core.database.entities.reading_plans import ReadingPlan
from bibliafs.core.database.entities.study import Bookmark, Note, Prayer


class TestUserOwnedRepository:
    """Owned rows are only visible and deletable by their owner."""

    async def test_list_for_user_is_scoped_and_newest_first(self, repos, make_user):
        await make_user("u1")
        await make_user("u2")
        first = await repos.prayers.create(Prayer(user_id="u1", title="Pela família"))
        second = await repos.prayers.create(Prayer(user_id="u1", title="Pelo trabalho"))
        await repos.prayers.create(Prayer(user_id="u2", title="Outro usuário"))

        prayers = await repos.prayers.list_for_user("u1")

        assert [p.id for p in prayers] == [second.id, first.id]

    async def test_get_owned_rejects_other_users(self, repos, make_user):
        await make_user("u1")
        await make_user("u2")
        note = await repos.notes.create(Note(user_id="u1", book="jo", chapter=3, content="Amor de Deus"))

        assert (await repos.notes.get_owned(note.id, "u1")).content == "Amor de Deus"
        assert await repos.notes.get_owned(note.id, "u2") is None

    async def test_delete_owned(self, repos, make_user):
        await make_user("u1")
        await make_user("u2")
        bookmark = await repos.bookmarks.create(Bookmark(user_id="u1", book="sl", chapter=23, verse=1))

        assert await repos.bookmarks.delete_owned(bookmark.id, "u2") is False
        assert await repos.bookmarks.delete_owned(bookmark.id, "u1") is True
        assert await repos.bookmarks.get_by_id(bookmark.id) is None

    async def test_count_for_user_with_filters(self, repos, make_user):
        await make_user("u1")
        await repos.prayers.create(Prayer(user_id="u1", title="a", is_answered=True))
        await repos.prayers.create(Prayer(user_id="u1", title="b"))

        assert await repos.prayers.count_for_user("u1") == 2
        assert await repos.prayers.count_for_user("u1", is_answered=True) == 1


class TestBibleSettingsRepository:
    async def test_upsert_creates_then_updates(self, repos, make_user):
        await make_user("u1")

        created = await repos.bible_settings.upsert("u1", {"font_size": 20})
        updated = await repos.bible_settings.upsert("u1", {"preferred_version": "acf"})

        assert created.id == updated.id
        assert updated.font_size == 20
        assert updated.preferred_version == "acf"
        assert await repos.bible_settings.count() == 1


class TestReadingPlanRepository:
    async def test_get_current_skips_completed_plans(self, repos, make_user):
        await make_user("u1")
        active = await repos.reading_plans.create(ReadingPlan(user_id="u1", title="Ativo"))
        await repos.reading_plans.create(ReadingPlan(user_id="u1", title="Concluído", is_completed=True))

        current = await repos.reading_plans.get_current("u1")

        assert current is not None and current.id == active.id

    async def test_get_current_none_without_plans(self, repos, make_user):
        await make_user("u1")

        assert await repos.reading_plans.get_current("u1") is None


class TestMediaRepositories:
    async def test_audio_progress_upsert_keeps_one_row_per_chapter(self, repos, make_user):
        await make_user("u1")

        await repos.audio_progress.upsert("u1", "jo", 3, "nvi", {"current_time": 10.0, "duration": 300.0})
        row = await repos.audio_progress.upsert("u1", "jo", 3, "nvi", {"current_time": 120.0})

        assert row.current_time == 120.0
        assert row.duration == 300.0
        assert await repos.audio_progress.count_for_user("u1") == 1

    async def test_offline_content_delete_all(self, repos, make_user):
        await make_user("u1")
        await repos.offline_content.upsert("u1", "gn", 1, "nvi", {"verses": []}, 12)
        await repos.offline_content.upsert("u1", "gn", 2, "nvi", {"verses": []}, 12)

        assert await repos.offline_content.delete_all_for_user("u1") == 2
        assert await repos.offline_content.list_for_user("u1") == []


class TestDonationRepository:
    async def test_mark_completed_by_checkout_id(self, repos, make_user):
        await make_user("u1")
        await repos.donations.create(Donation(user_id="u1", amount=2500, stripe_payment_id="cs_1"))

        donation = await repos.donations.mark_completed("cs_1")

        assert donation is not None and donation.status == "completed"
        assert await repos.donations.mark_completed("cs_missing") is None
