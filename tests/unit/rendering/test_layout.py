"""Tests for layout application and the pre-layout split."""

import jinja2
import pytest

from template_streaming.rendering.layout import (
    Continuation,
    ImplicitLayout,
    PartialLayout,
    PreLayoutSplitter,
    prelayout_path,
)


LAYOUT = "<main>{{ content_for_layout }}</main>"


@pytest.fixture
def body_calls():
    return []


@pytest.fixture
def controller_with(make_controller, body_calls):
    def factory(templates):
        controller = make_controller(templates, layout="layouts/application")

        def mark():
            body_calls.append(True)
            return ""

        controller.assigns["mark"] = mark
        return controller

    return factory


@pytest.mark.unit
class TestPrelayoutPath:
    @pytest.mark.parametrize(
        ("layout", "expected"),
        [
            ("layouts/application", "layouts/preapplication"),
            ("application", "preapplication"),
            ("admin/layouts/base", "admin/layouts/prebase"),
        ],
    )
    def test_same_directory_prefixed_name(self, layout, expected):
        assert prelayout_path(layout) == expected


@pytest.mark.unit
class TestContinuation:
    async def test_runs_step_once(self):
        calls = []

        async def step():
            calls.append(True)
            return "<p>body</p>"

        continuation = Continuation(step)

        assert await continuation() == "<p>body</p>"
        assert continuation.consumed
        assert await continuation() == ""
        assert calls == [True]

    async def test_drain_runs_before_step_when_called(self):
        order = []

        async def drain():
            order.append("drain")

        async def step():
            order.append("step")
            return "<p>body</p>"

        continuation = Continuation(step, drain)

        assert await continuation() == "<p>body</p>"
        assert order == ["drain", "step"]

    async def test_run_without_drain_skips_it(self):
        drain_calls = []

        async def drain():
            drain_calls.append(True)

        async def step():
            return "<p>body</p>"

        continuation = Continuation(step, drain)

        assert await continuation.run(drain=False) == "<p>body</p>"
        assert drain_calls == []


@pytest.mark.unit
class TestPreLayoutSplitter:
    async def test_no_prelayout_renders_layout_normally(
        self, controller_with, body_calls
    ):
        controller = controller_with(
            {"index.html": "{{ mark() }}Hello", "layouts/application.html": LAYOUT}
        )

        output = await controller.view.render_template(
            "index", "layouts/application", {}
        )

        assert output == "<main>Hello</main>"
        assert body_calls == [True]

    async def test_prelayout_invoking_continuation_explicitly(
        self, controller_with, body_calls
    ):
        controller = controller_with(
            {
                "index.html": "{{ mark() }}Hello",
                "layouts/application.html": LAYOUT,
                "layouts/preapplication.html": (
                    "<head></head>{{ render_body() }}<footer></footer>"
                ),
            }
        )

        output = await controller.view.render_template(
            "index", "layouts/application", {}
        )

        assert output == "<head></head><main>Hello</main><footer></footer>"
        assert body_calls == [True]

    async def test_continuation_invoked_twice_renders_body_once(
        self, controller_with, body_calls
    ):
        controller = controller_with(
            {
                "index.html": "{{ mark() }}Hello",
                "layouts/application.html": LAYOUT,
                "layouts/preapplication.html": "{{ render_body() }}{{ render_body() }}",
            }
        )

        output = await controller.view.render_template(
            "index", "layouts/application", {}
        )

        assert output == "<main>Hello</main>"
        assert body_calls == [True]

    async def test_prelayout_without_continuation_appends_body(
        self, controller_with, body_calls
    ):
        controller = controller_with(
            {
                "index.html": "{{ mark() }}Hello",
                "layouts/application.html": LAYOUT,
                "layouts/preapplication.html": "<head>{{ title }}</head>",
            }
        )

        output = await controller.view.render_template(
            "index", "layouts/application", {"title": "Inbox"}
        )

        assert output == "<head>Inbox</head><main>Hello</main>"
        assert body_calls == [True]

    async def test_explicit_partial_layout_is_never_split(self, controller_with):
        controller = controller_with(
            {
                "card.html": "Card",
                "layouts/application.html": LAYOUT,
                "layouts/preapplication.html": "<head></head>{{ render_body() }}",
            }
        )

        output = await controller.view.render_partial(
            "card", "layouts/application", {}
        )

        assert output == "<main>Card</main>"

    async def test_lookup_errors_other_than_not_found_propagate(
        self, controller_with
    ):
        controller = controller_with(
            {
                "index.html": "Hello",
                "layouts/application.html": LAYOUT,
                "layouts/preapplication.html": "{% if %}",
            }
        )

        with pytest.raises(jinja2.TemplateSyntaxError):
            await controller.view.render_template("index", "layouts/application", {})

    def test_prelayout_for_partial_layout_is_none(self, make_engine):
        splitter = PreLayoutSplitter(
            make_engine({"layouts/preapplication.html": "<head></head>"})
        )

        assert splitter.prelayout_for(PartialLayout("layouts/application")) is None

    def test_prelayout_for_implicit_layout(self, make_engine):
        engine = make_engine(
            {
                "layouts/application.html": LAYOUT,
                "layouts/preapplication.html": "<head></head>",
            }
        )
        splitter = PreLayoutSplitter(engine)
        layout = ImplicitLayout(engine.find_template("layouts/application", "html"))

        prelayout = splitter.prelayout_for(layout)

        assert prelayout is not None
        assert prelayout.name == "layouts/preapplication.html"
