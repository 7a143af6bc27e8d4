"""Tests for IdeaStore."""

from pathlib import Path

import pytest

from ideation.boundary.storage.idea_store import IdeaStore
from ideation.core.exceptions import ValidationError
from ideation.models.idea import Idea, IdeaCategory


@pytest.fixture
def idea_store(storage_settings) -> IdeaStore:
    return IdeaStore(storage_settings)


class TestIdeaStore:
    @pytest.mark.asyncio
    async def test_save_and_get(self, idea_store: IdeaStore, project_dir: Path) -> None:
        idea = Idea(title="Offline mode", category=IdeaCategory.FEATURE, user_stories=["As a user..."])

        await idea_store.save(str(project_dir), idea)

        assert await idea_store.get(str(project_dir), idea.id) == idea

    @pytest.mark.asyncio
    async def test_stored_with_camel_case_keys(self, idea_store: IdeaStore, project_dir: Path) -> None:
        idea = Idea(title="Offline mode", category=IdeaCategory.FEATURE)

        await idea_store.save(str(project_dir), idea)

        text = idea_store.layout.idea_path(str(project_dir), idea.id).read_text(encoding="utf-8")
        assert '"createdAt"' in text
        assert '"userStories"' in text

    @pytest.mark.asyncio
    async def test_list_all_skips_invalid_folder_names(
        self, idea_store: IdeaStore, project_dir: Path
    ) -> None:
        idea = Idea(title="A", category=IdeaCategory.DX)
        await idea_store.save(str(project_dir), idea)
        (idea_store.layout.ideas_dir(str(project_dir)) / ".hidden").mkdir()

        ideas = await idea_store.list_all(str(project_dir))

        assert [i.id for i in ideas] == [idea.id]

    @pytest.mark.asyncio
    async def test_delete(self, idea_store: IdeaStore, project_dir: Path) -> None:
        idea = Idea(title="A", category=IdeaCategory.DX)
        await idea_store.save(str(project_dir), idea)

        assert await idea_store.delete(str(project_dir), idea.id) is True
        assert await idea_store.delete(str(project_dir), idea.id) is False
        assert await idea_store.get(str(project_dir), idea.id) is None

    @pytest.mark.asyncio
    async def test_unsafe_id_rejected(self, idea_store: IdeaStore, project_dir: Path) -> None:
        with pytest.raises(ValidationError):
            await idea_store.get(str(project_dir), "../../etc")

    @pytest.mark.asyncio
    async def test_list_all_skips_unreadable_files(
        self, idea_store: IdeaStore, project_dir: Path
    ) -> None:
        good = Idea(title="Good", category=IdeaCategory.DX)
        await idea_store.save(str(project_dir), good)
        broken = idea_store.layout.idea_path(str(project_dir), "broken")
        broken.parent.mkdir(parents=True)
        broken.write_bytes(b'{"title": "\xff\xfe"}')

        ideas = await idea_store.list_all(str(project_dir))

        assert [i.id for i in ideas] == [good.id]
        assert await idea_store.get(str(project_dir), "broken") is None
