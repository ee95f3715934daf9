"""
Unit tests for the invocation adapter.

The adapter is exercised directly with stub resolve infos; schema level
behaviour is covered in test_mutation_execution.
"""

import logging
from types import SimpleNamespace
from unittest.mock import patch

import graphene
import pytest

from rail_relay import InvocationAdapter, RelayClassicMutation, RelayMutationSettings
from rail_relay.invocation import is_keyed_record, reinsert_client_mutation_id, to_kwargs

pytestmark = pytest.mark.unit


def _make_recording_mutation(**meta):
    calls = []

    class Record(RelayClassicMutation):
        class Meta:
            name = meta.get("name", "Record")
            extras = meta.get("extras", ())

        class Arguments:
            title = graphene.String()
            count = graphene.Int()

        ok = graphene.Boolean()

        @classmethod
        def mutate(cls, root, info, **kwargs):
            calls.append(kwargs)
            return cls(ok=True)

    return Record, calls


def _info(**context):
    return SimpleNamespace(
        context=SimpleNamespace(**context),
        field_name="record",
        path=None,
        field_nodes=[],
        operation=None,
        variable_values={},
    )


class TestToKwargs:
    def test_none_becomes_empty_dict(self):
        assert to_kwargs(None) == {}

    def test_mapping_is_copied(self):
        value = {"title": "A"}
        result = to_kwargs(value)

        assert result == {"title": "A"}
        assert result is not value


class TestReinsertClientMutationId:
    """Tests for writing the client mutation id back into results."""

    def test_dict_result_receives_id(self):
        result = reinsert_client_mutation_id("abc", {"widget": 1})

        assert result == {"widget": 1, "client_mutation_id": "abc"}

    def test_object_type_result_receives_id(self):
        class Payload(graphene.ObjectType):
            client_mutation_id = graphene.String()

        payload = Payload()
        assert reinsert_client_mutation_id("abc", payload) is payload
        assert payload.client_mutation_id == "abc"

    def test_missing_id_is_written_as_none(self):
        result = reinsert_client_mutation_id(None, {"widget": 1})

        assert "client_mutation_id" in result
        assert result["client_mutation_id"] is None

    @pytest.mark.parametrize("value", [None, "error", 42, ("a", "b")])
    def test_non_record_values_are_returned_unchanged(self, value):
        assert reinsert_client_mutation_id("abc", value) is value

    def test_error_objects_are_not_records(self):
        error = ValueError("boom")

        assert is_keyed_record(error) is False
        assert reinsert_client_mutation_id("abc", error) is error

    def test_resolver_set_id_is_overwritten_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="rail_relay.invocation"):
            result = reinsert_client_mutation_id(
                "client", {"client_mutation_id": "server"}, mutation_name="Record"
            )

        assert result["client_mutation_id"] == "client"
        assert "Record resolver set client_mutation_id" in caplog.text

    def test_overwrite_warning_can_be_disabled(self, caplog):
        with caplog.at_level(logging.WARNING, logger="rail_relay.invocation"):
            reinsert_client_mutation_id(
                "client", {"client_mutation_id": "server"}, warn_on_overwrite=False
            )

        assert caplog.text == ""


class TestInvocationAdapter:
    """Tests for InvocationAdapter.prepare and __call__."""

    def test_prepare_strips_client_mutation_id(self):
        mutation, _ = _make_recording_mutation()
        adapter = InvocationAdapter(mutation)

        invocation = adapter.prepare(
            None,
            _info(),
            {"input": {"title": "A", "client_mutation_id": "7"}},
            RelayMutationSettings(),
        )

        assert invocation.arguments == {"title": "A"}
        assert invocation.client_mutation_id == "7"
        assert invocation.extras == ()

    def test_prepare_transfers_available_extras(self):
        mutation, _ = _make_recording_mutation(extras=["user"])
        adapter = InvocationAdapter(mutation, field_extras=("field_name",))
        user = SimpleNamespace(is_authenticated=True)

        invocation = adapter.prepare(
            None, _info(user=user), {"input": {"title": "A"}}, RelayMutationSettings()
        )

        assert adapter.extras == ("user", "field_name")
        assert invocation.arguments == {"title": "A", "user": user, "field_name": "record"}
        assert invocation.extras == ("user", "field_name")

    def test_missing_extras_are_not_fabricated(self):
        mutation, _ = _make_recording_mutation(extras=["user"])
        adapter = InvocationAdapter(mutation)

        invocation = adapter.prepare(
            None, _info(), {"input": {"title": "A"}}, RelayMutationSettings()
        )

        assert invocation.arguments == {"title": "A"}
        assert invocation.extras == ()

    def test_extras_supplied_by_caller_are_transferred(self):
        mutation, _ = _make_recording_mutation(extras=["user"])
        adapter = InvocationAdapter(mutation)
        user = SimpleNamespace(is_authenticated=True)

        invocation = adapter.prepare(
            None, _info(), {"input": {}, "user": user}, RelayMutationSettings()
        )

        assert invocation.arguments == {"user": user}

    def test_configured_extra_provider_is_used(self):
        mutation, _ = _make_recording_mutation()

        def lookahead(root, info):
            return ["widget", "clientMutationId"]

        adapter = InvocationAdapter(mutation, field_extras=("lookahead",))
        mutation_settings = RelayMutationSettings(
            extra_providers={"lookahead": "project.extras.lookahead"}
        )
        with patch("rail_relay.extras.import_string", return_value=lookahead):
            invocation = adapter.prepare(
                None, _info(), {"input": {"title": "A"}}, mutation_settings
            )

        assert invocation.arguments["lookahead"] == ["widget", "clientMutationId"]

    def test_zero_arguments_call_resolver_without_keywords(self):
        received = []

        class Touch(RelayClassicMutation):
            touched = graphene.Boolean()

            @staticmethod
            def mutate(root, info, *args, **kwargs):
                received.append((root, args, kwargs))
                return {"touched": True}

        adapter = InvocationAdapter(Touch)
        result = adapter(None, _info())

        assert received == [(None, (), {})]
        assert result == {"touched": True, "client_mutation_id": None}

    def test_call_passes_flat_arguments_and_reinserts_id(self):
        mutation, calls = _make_recording_mutation()
        adapter = InvocationAdapter(mutation)

        result = adapter(None, _info(), input={"title": "A", "count": 2, "client_mutation_id": "x"})

        assert calls == [{"title": "A", "count": 2}]
        assert result.ok is True
        assert result.client_mutation_id == "x"

    def test_resolver_errors_propagate(self):
        class Explode(RelayClassicMutation):
            ok = graphene.Boolean()

            @classmethod
            def mutate(cls, root, info, **kwargs):
                raise RuntimeError("boom")

        adapter = InvocationAdapter(Explode)

        with pytest.raises(RuntimeError, match="boom"):
            adapter(None, _info(), input={"client_mutation_id": "x"})

    def test_custom_resolver_replaces_mutate(self):
        def resolve_archive(root, info, **kwargs):
            return {"archived": kwargs}

        class Archive(RelayClassicMutation):
            class Meta:
                resolver = resolve_archive

            class Arguments:
                reason = graphene.String()

            archived = graphene.Boolean()

        result = InvocationAdapter(Archive)(None, _info(), input={"reason": "old"})

        assert result == {"archived": {"reason": "old"}, "client_mutation_id": None}
