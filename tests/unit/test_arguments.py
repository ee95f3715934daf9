"""
Unit tests for mutation argument declarations.
"""

import graphene
import pytest
from graphql import Undefined

from rail_relay import MutationArgument, MutationConfigurationError, RelayClassicMutation

pytestmark = pytest.mark.unit


class TestMutationArgumentDeclare:
    """Tests for MutationArgument.declare."""

    def test_declare_from_type_class(self):
        argument = MutationArgument.declare("title", graphene.String)

        assert argument.type is graphene.String
        assert argument.required is False
        assert argument.default_value is Undefined
        assert argument.external_name == "title"

    def test_declare_from_unmounted_instance(self):
        argument = MutationArgument.declare(
            "page_size", graphene.Int(required=True, description="Rows per page")
        )

        assert argument.type is graphene.Int
        assert argument.required is True
        assert argument.description == "Rows per page"
        assert argument.external_name == "pageSize"

    def test_declare_from_mounted_argument(self):
        argument = MutationArgument.declare(
            "limit", graphene.Argument(graphene.Int, default_value=10, name="max")
        )

        assert argument.type is graphene.Int
        assert argument.default_value == 10
        assert argument.external_name == "max"

    def test_declare_from_structure(self):
        argument = MutationArgument.declare("tags", graphene.List(graphene.String))

        assert isinstance(argument.type, graphene.List)
        assert argument.type.of_type is graphene.String

    def test_explicit_options_win_over_embedded_ones(self):
        argument = MutationArgument.declare(
            "title",
            graphene.String(required=True, description="Embedded"),
            "Explicit",
            required=False,
        )

        assert argument.required is False
        assert argument.description == "Explicit"

    def test_permissions_are_normalized(self):
        single = MutationArgument.declare("a", graphene.String, permissions="app.change_a")
        many = MutationArgument.declare("b", graphene.String, permissions=["x.a", "x.b"])

        assert single.permissions == ("app.change_a",)
        assert many.permissions == ("x.a", "x.b")
        assert single.requires_authorization is True
        assert MutationArgument.declare("c", graphene.String).requires_authorization is False

    def test_unknown_option_is_rejected(self):
        with pytest.raises(MutationConfigurationError) as exc_info:
            MutationArgument.declare("title", graphene.String, loads="Post")

        assert exc_info.value.argument_name == "title"
        assert "loads" in str(exc_info.value)

    def test_required_argument_cannot_be_deprecated(self):
        with pytest.raises(MutationConfigurationError):
            MutationArgument.declare(
                "title", graphene.String, required=True, deprecation_reason="Use name"
            )

    def test_authorize_must_be_callable(self):
        with pytest.raises(MutationConfigurationError):
            MutationArgument.declare("title", graphene.String, authorize="yes")

    @pytest.mark.parametrize(
        "name, options",
        [
            ("client_mutation_id", {}),
            ("correlation", {"name": "clientMutationId"}),
        ],
    )
    def test_client_mutation_id_is_reserved(self, name, options):
        with pytest.raises(MutationConfigurationError) as exc_info:
            MutationArgument.declare(name, graphene.String, **options)

        assert "reserved" in str(exc_info.value)


class TestDeclareOnMutation:
    """Tests for RelayClassicMutation.argument."""

    def _make_mutation(self):
        class Rename(RelayClassicMutation):
            class Arguments:
                old_name = graphene.String()

            ok = graphene.Boolean()

            @classmethod
            def mutate(cls, root, info, **kwargs):
                return cls(ok=True)

        return Rename

    def test_argument_returns_recorded_declaration(self):
        mutation = self._make_mutation()

        argument = mutation.argument("new_name", graphene.String, "The new name")

        assert mutation._meta.definition.own_arguments["new_name"] is argument
        assert argument.owner is mutation
        assert mutation.input_type()._meta.fields["new_name"].description == "The new name"

    def test_name_option_sets_external_name(self):
        mutation = self._make_mutation()

        argument = mutation.argument("new_name", graphene.String, name="renamed")
        field = mutation.input_type()._meta.fields["new_name"]

        assert argument.name == "new_name"
        assert argument.external_name == "renamed"
        assert field.name == "renamed"

    def test_name_option_is_keyword_on_declare(self):
        argument = MutationArgument.declare(
            "title", graphene.String, description="Headline", name="headline"
        )

        assert argument.name == "title"
        assert argument.description == "Headline"
        assert argument.external_name == "headline"

    def test_external_name_collision_is_rolled_back(self):
        mutation = self._make_mutation()

        with pytest.raises(MutationConfigurationError) as exc_info:
            mutation.argument("oldName", graphene.String)

        assert exc_info.value.mutation_name == "Rename"
        assert "oldName" not in mutation._meta.definition.own_arguments
        assert list(mutation.input_type()._meta.fields) == ["old_name", "client_mutation_id"]

    def test_failed_redeclaration_restores_previous_argument(self):
        mutation = self._make_mutation()
        previous = mutation._meta.definition.own_arguments["old_name"]

        with pytest.raises(MutationConfigurationError):
            mutation.argument("old_name", graphene.String, name="clientMutationId")

        assert mutation._meta.definition.own_arguments["old_name"] is previous

    def test_reserved_name_in_arguments_class_fails_class_creation(self):
        with pytest.raises(MutationConfigurationError):

            class Reserved(RelayClassicMutation):
                class Arguments:
                    client_mutation_id = graphene.String()

                ok = graphene.Boolean()

                @classmethod
                def mutate(cls, root, info, **kwargs):
                    return cls(ok=True)

    def test_mutation_without_mutate_is_rejected(self):
        with pytest.raises(MutationConfigurationError) as exc_info:

            class NoResolver(RelayClassicMutation):
                ok = graphene.Boolean()

        assert "mutate" in str(exc_info.value)

    def test_output_without_client_mutation_id_is_rejected(self):
        class BarePayload(graphene.ObjectType):
            ok = graphene.Boolean()

        with pytest.raises(MutationConfigurationError) as exc_info:

            class WithOutput(RelayClassicMutation):
                class Meta:
                    output = BarePayload

                @classmethod
                def mutate(cls, root, info, **kwargs):
                    return BarePayload(ok=True)

        assert "client_mutation_id" in str(exc_info.value)
