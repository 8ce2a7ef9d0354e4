# =============================================================================
# TESTES - Quiz Store (AgentFS mockado)
# =============================================================================

import pytest


class TestQuizStore:
    """Testes para QuizStore."""

    @pytest.mark.asyncio
    async def test_save_and_load(self, quiz_store, sample_definition):
        """Verifica persistencia da definicao completa."""
        await quiz_store.save(sample_definition)

        loaded = await quiz_store.load("quiz-1")

        assert loaded.model_dump() == sample_definition.model_dump()

    @pytest.mark.asyncio
    async def test_stored_as_camel_case(self, quiz_store, mock_agentfs, sample_definition):
        """Verifica formato JSON camelCase no KV."""
        await quiz_store.save(sample_definition)

        raw = await mock_agentfs.kv.get("quiz:quiz-1")

        assert raw["ownerId"] == "owner-1"
        assert raw["settings"]["collectLeadBeforeResult"] is True

    @pytest.mark.asyncio
    async def test_load_missing(self, quiz_store):
        """Verifica None para quiz inexistente."""
        assert await quiz_store.load("nao-existe") is None

    @pytest.mark.asyncio
    async def test_get_by_slug(self, quiz_store, sample_definition):
        """Verifica resolucao do link publico."""
        await quiz_store.save(sample_definition)

        loaded = await quiz_store.get_by_slug(sample_definition.slug)

        assert loaded.id == "quiz-1"
        assert await quiz_store.get_by_slug("outro-slug") is None

    @pytest.mark.asyncio
    async def test_update_replaces_slug_index(self, quiz_store, sample_definition):
        """Verifica reindexacao do slug na atualizacao."""
        await quiz_store.save(sample_definition)

        updated = await quiz_store.update(
            "quiz-1", sample_definition.model_copy(update={"slug": "novo-slug"})
        )

        assert updated.updated_at >= sample_definition.updated_at
        assert await quiz_store.get_by_slug("novo-slug") is not None
        assert await quiz_store.get_by_slug(sample_definition.slug) is None

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, quiz_store, sample_definition):
        """Verifica erro ao atualizar quiz inexistente."""
        with pytest.raises(ValueError):
            await quiz_store.update("quiz-1", sample_definition)

    @pytest.mark.asyncio
    async def test_list_by_owner_newest_first(self, quiz_store, definition_factory):
        """Verifica listagem por dono em ordem decrescente de criacao."""
        from datetime import datetime, timezone

        older = definition_factory(id="a", slug="a", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        newer = definition_factory(id="b", slug="b", created_at=datetime(2025, 1, 1, tzinfo=timezone.utc))
        foreign = definition_factory(id="c", slug="c", owner_id="outro")
        for definition in (older, newer, foreign):
            await quiz_store.save(definition)

        quizzes = await quiz_store.list_by_owner("owner-1")

        assert [q.id for q in quizzes] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_delete_removes_indexes(self, quiz_store, sample_definition):
        """Verifica remocao da definicao, slug e indice do dono."""
        await quiz_store.save(sample_definition)

        await quiz_store.delete("quiz-1")

        assert await quiz_store.load("quiz-1") is None
        assert await quiz_store.get_by_slug(sample_definition.slug) is None
        assert await quiz_store.list_by_owner("owner-1") == []

    @pytest.mark.asyncio
    async def test_increment_responses(self, quiz_store, sample_definition):
        """Verifica contador de respostas."""
        await quiz_store.save(sample_definition)

        assert await quiz_store.increment_responses("quiz-1") == 1
        assert await quiz_store.increment_responses("quiz-1") == 2
        assert (await quiz_store.load("quiz-1")).total_responses == 2
        assert await quiz_store.increment_responses("nao-existe") == 0
