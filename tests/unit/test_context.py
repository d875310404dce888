"""
Tests for core.node.context parameter resolution.
"""

import pytest

from core.http.request import RequestSpec
from core.node.context import ExecutionContext
from core.node.errors import NodeOperationError, NodeParameterError
from core.node.items import NodeExecutionData


class TestInputData:

    def test_raw_items_are_wrapped(self, make_context):
        context = make_context({}, items=[{"a": 1}, "text", 3])

        items = context.get_input_data()

        assert all(isinstance(item, NodeExecutionData) for item in items)
        assert [item.json_data for item in items] == [{"a": 1}, "text", 3]

    def test_existing_items_are_kept(self, make_context):
        item = NodeExecutionData(json_data={"a": 1})
        context = make_context({}, items=[item])
        assert context.get_input_data()[0] is item

    def test_continue_on_fail_flag(self, make_context):
        assert make_context({}).continue_on_fail() is False
        assert make_context({}, continue_on_fail=True).continue_on_fail() is True


class TestGetNodeParameter:

    def test_declared_defaults(self, make_context):
        context = make_context({})

        assert context.get_node_parameter("resource", 0) == "message"
        assert context.get_node_parameter("operation", 0) == "create"
        assert context.get_node_parameter("limit", 0) == 100

    def test_static_value(self, make_context):
        context = make_context({"channel": "C1"})
        assert context.get_node_parameter("channel", 0) == "C1"

    def test_call_site_default_wins_over_declared(self, make_context):
        context = make_context({})
        assert context.get_node_parameter("limit", 0, 5) == 5

    def test_unknown_parameter(self, make_context):
        context = make_context({})

        with pytest.raises(NodeParameterError) as exc_info:
            context.get_node_parameter("nope", 0)

        assert exc_info.value.parameter == "nope"
        assert context.get_node_parameter("nope", 0, None) is None

    def test_required_empty_value(self, make_context):
        context = make_context({"text": ""})

        with pytest.raises(NodeParameterError) as exc_info:
            context.get_node_parameter("text", 0)

        assert "Text" in str(exc_info.value)
        assert exc_info.value.item_index == 0

    def test_expression_uses_item_json(self, make_context):
        context = make_context(
            {"channel": "={{ json.team.channel }}"},
            items=[{"team": {"channel": "C1"}}, {"team": {"channel": "C2"}}],
        )

        assert context.get_node_parameter("channel", 0) == "C1"
        assert context.get_node_parameter("channel", 1) == "C2"

    def test_expression_missing_field(self, make_context):
        context = make_context({"channel": "={{ json.missing }}"}, items=[{}])

        with pytest.raises(NodeParameterError) as exc_info:
            context.get_node_parameter("channel", 0)

        assert "expression" in str(exc_info.value)

    def test_expression_syntax_error(self, make_context):
        context = make_context({"channel": "={{ json. }}"}, items=[{}])

        with pytest.raises(NodeParameterError):
            context.get_node_parameter("channel", 0)

    @pytest.mark.parametrize("value,expected", [(5, 5), ("25", 25), (1000, 1000)])
    def test_number_coercion(self, make_context, value, expected):
        context = make_context({"operation": "getMany", "limit": value})
        assert context.get_node_parameter("limit", 0) == expected

    @pytest.mark.parametrize("value", [0, 1001, "many", True])
    def test_number_rejected(self, make_context, value):
        context = make_context({"operation": "getMany", "limit": value})

        with pytest.raises(NodeParameterError):
            context.get_node_parameter("limit", 0)

    def test_invalid_option(self, make_context):
        context = make_context({"resource": "user"})

        with pytest.raises(NodeParameterError):
            context.get_node_parameter("resource", 0)

    def test_operation_valid_for_each_resource(self, make_context):
        message = make_context({"resource": "message", "operation": "update"})
        channel = make_context({"resource": "channel", "operation": "delete"})

        assert message.get_node_parameter("operation", 0) == "update"
        assert channel.get_node_parameter("operation", 0) == "delete"

    @pytest.mark.parametrize("name", ["resource", "operation"])
    def test_selectors_reject_expressions(self, make_context, name):
        context = make_context({name: "={{ json.choice }}"}, items=[{"choice": "channel"}])

        with pytest.raises(NodeParameterError) as exc_info:
            context.get_node_parameter(name, 0)

        assert "does not accept expressions" in str(exc_info.value)
        assert exc_info.value.parameter == name

    def test_other_parameters_accept_expressions(self, make_context):
        context = make_context({"text": "={{ json.body }}"}, items=[{"body": "hi"}])
        assert context.get_node_parameter("text", 0) == "hi"


class TestAuthenticatedRequests:

    @pytest.mark.asyncio
    async def test_delegates_to_sender(self, make_context, fake_sender):
        request = RequestSpec("POST", "https://slack.com/api/auth.test")
        context = make_context({})

        response = await context.http_request_with_authentication("slackApi", request)

        assert response == {"ok": True}
        fake_sender.assert_awaited_once_with("slackApi", request)

    @pytest.mark.asyncio
    async def test_without_sender(self, slack_description):
        context = ExecutionContext(slack_description, [{}], {})

        with pytest.raises(NodeOperationError):
            await context.http_request_with_authentication(
                "slackApi", RequestSpec("GET", "https://slack.com/api/conversations.list")
            )
