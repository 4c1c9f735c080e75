"""Unit tests for the stacking-context rules."""

import pytest

from isolate_on_stack.models import Declaration, RuleBlock, Severity

REDUNDANT = "no-redundant-declaration"
BACKGROUND_BLEND = "ineffective-on-background-blend"
SIDE_EFFECTS = "prefer-over-side-effects"
DESCENDANTS = "performance-high-descendant-count"


class TestNoRedundantDeclarationRule:
    """Tests for isolate-on-stack/no-redundant-declaration."""

    def test_reports_isolation_with_position_and_z_index(self, lint_with_rule):
        css = ".x {\n  position: relative;\n  z-index: 1;\n  isolation: isolate;\n}"
        result = lint_with_rule(css, REDUNDANT)

        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.rule_id == "isolate-on-stack/no-redundant-declaration"
        assert isinstance(diagnostic.node, Declaration)
        assert diagnostic.node.property == "isolation"
        assert (diagnostic.line, diagnostic.column) == (4, 3)
        assert "position: relative with z-index: 1" in diagnostic.message

    @pytest.mark.parametrize(
        "declaration",
        [
            "opacity: 0.5",
            "transform: rotate(3deg)",
            "filter: blur(1px)",
            "mix-blend-mode: screen",
            "contain: paint",
            "will-change: transform",
            "clip-path: circle(50%)",
        ],
    )
    def test_reports_each_trigger(self, lint_with_rule, declaration):
        result = lint_with_rule(f".x {{ {declaration}; isolation: isolate; }}", REDUNDANT)

        assert len(result.diagnostics) == 1

    def test_isolation_alone_is_not_redundant(self, lint_with_rule):
        result = lint_with_rule(".x { isolation: isolate; }", REDUNDANT)

        assert result.diagnostics == []

    def test_no_isolation(self, lint_with_rule):
        result = lint_with_rule(".a { position: absolute; z-index: 1; }", REDUNDANT)

        assert result.diagnostics == []

    def test_isolation_auto(self, lint_with_rule):
        result = lint_with_rule(".x { opacity: 0.5; isolation: auto; }", REDUNDANT)

        assert result.diagnostics == []

    def test_merges_blocks_with_same_selector(self, lint_with_rule):
        css = ".x { transform: scale(2); }\n.x { isolation: isolate; }"
        result = lint_with_rule(css, REDUNDANT)

        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].line == 2

    def test_case_insensitive(self, lint_with_rule):
        result = lint_with_rule(".x { OPACITY: 0.5; Isolation: ISOLATE; }", REDUNDANT)

        assert len(result.diagnostics) == 1

    def test_ignore_selectors(self, lint_with_rule):
        css = ".x { opacity: 0.5; isolation: isolate; }"
        result = lint_with_rule(css, REDUNDANT, ignoreSelectors=["^\\.x$"])

        assert result.diagnostics == []

    def test_flex_item_annotation(self, lint_with_rule):
        css = "/* @parent-display: flex */\n.item { z-index: 1; isolation: isolate; }"
        result = lint_with_rule(css, REDUNDANT)

        assert len(result.diagnostics) == 1

    def test_flex_item_without_parent_display(self, lint_with_rule):
        result = lint_with_rule(".item { z-index: 1; isolation: isolate; }", REDUNDANT)

        assert result.diagnostics == []

    def test_nested_rule_not_merged_with_same_bare_selector(self, lint_with_rule):
        css = ".parent { color: red; .child { opacity: .5; } }\n.child { isolation: isolate; }"

        assert lint_with_rule(css, REDUNDANT).diagnostics == []

    def test_nested_rule_with_own_context(self, lint_with_rule):
        css = ".parent {\n  .child { opacity: .5; isolation: isolate; }\n}"
        result = lint_with_rule(css, REDUNDANT)

        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].line == 2


class TestIneffectiveOnBackgroundBlendRule:
    """Tests for isolate-on-stack/ineffective-on-background-blend."""

    def test_reports_once(self, lint_with_rule):
        css = ".x { background-blend-mode: multiply; isolation: isolate; }"
        result = lint_with_rule(css, BACKGROUND_BLEND)

        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].node.property == "isolation"
        assert "background-blend-mode" in result.diagnostics[0].message

    def test_normal_blend_mode(self, lint_with_rule):
        css = ".x { background-blend-mode: normal; isolation: isolate; }"

        assert lint_with_rule(css, BACKGROUND_BLEND).diagnostics == []

    def test_without_isolation(self, lint_with_rule):
        css = ".x { background-blend-mode: multiply; }"

        assert lint_with_rule(css, BACKGROUND_BLEND).diagnostics == []

    def test_mix_blend_mode_is_not_background(self, lint_with_rule):
        css = ".x { mix-blend-mode: multiply; isolation: isolate; }"

        assert lint_with_rule(css, BACKGROUND_BLEND).diagnostics == []


class TestPreferOverSideEffectsRule:
    """Tests for isolate-on-stack/prefer-over-side-effects."""

    def test_translate_z_hack(self, lint_with_rule):
        result = lint_with_rule(".x { transform: translateZ(0); }", SIDE_EFFECTS)

        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].node.property == "transform"
        assert "transform: translateZ(0)" in result.diagnostics[0].message

    @pytest.mark.parametrize(
        "declaration",
        [
            "opacity: 0.99",
            "opacity: 0.999",
            "transform: translate3d(0,0,0)",
            "transform: matrix3d(1,0,0,0,0,1,0,0,0,0,1,0,0,0,0,1)",
            "will-change: transform",
            "will-change: opacity, scroll-position",
            "will-change: z-index",
        ],
    )
    def test_hack_patterns(self, lint_with_rule, declaration):
        result = lint_with_rule(f".x {{ {declaration}; }}", SIDE_EFFECTS)

        assert len(result.diagnostics) == 1

    @pytest.mark.parametrize(
        "declaration",
        [
            "opacity: 1",
            "opacity: 0.5",
            "transform: rotate(45deg)",
            "will-change: scroll-position",
            "color: red",
        ],
    )
    def test_not_hacks(self, lint_with_rule, declaration):
        result = lint_with_rule(f".x {{ {declaration}; }}", SIDE_EFFECTS)

        assert result.diagnostics == []

    def test_one_diagnostic_per_declaration(self, lint_with_rule):
        css = ".x { opacity: 0.99; transform: translateZ(0); }\n.y { will-change: opacity; }"
        result = lint_with_rule(css, SIDE_EFFECTS)

        assert [d.node.property for d in result.diagnostics] == [
            "opacity",
            "transform",
            "will-change",
        ]

    def test_ignore_selectors(self, lint_with_rule):
        css = ".x { opacity: 0.99; }\n.y { opacity: 0.99; }"
        result = lint_with_rule(css, SIDE_EFFECTS, ignoreSelectors=["^\\.x$"])

        assert [d.line for d in result.diagnostics] == [2]


class TestPerformanceHighDescendantCountRule:
    """Tests for isolate-on-stack/performance-high-descendant-count."""

    def test_div_with_isolation(self, lint_with_rule):
        result = lint_with_rule("div { isolation: isolate; }", DESCENDANTS)

        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert isinstance(diagnostic.node, RuleBlock)
        assert "'div'" in diagnostic.message
        assert "estimated: 60" in diagnostic.message

    def test_narrow_selector_below_threshold(self, lint_with_rule):
        result = lint_with_rule(".a { position: absolute; z-index: 1; }", DESCENDANTS)

        assert result.diagnostics == []

    def test_no_stacking_context(self, lint_with_rule):
        result = lint_with_rule("div { color: red; opacity: 1; }", DESCENDANTS)

        assert result.diagnostics == []

    def test_threshold_is_strict(self, lint_with_rule):
        css = "div { transform: scale(1.1); }"

        assert lint_with_rule(css, DESCENDANTS, maxDescendantCount=60).diagnostics == []
        assert len(lint_with_rule(css, DESCENDANTS, maxDescendantCount=59).diagnostics) == 1

    def test_general_formula(self, lint_with_rule):
        # 2 parts, no id: 90
        result = lint_with_rule("article .content { opacity: 0.5; }", DESCENDANTS)

        assert "estimated: 90" in result.diagnostics[0].message

    def test_comment_in_selector_not_counted(self, lint_with_rule):
        css = ".a /* note */ .b { transform: rotate(1deg); }"

        assert lint_with_rule(css, DESCENDANTS, maxDescendantCount=100).diagnostics == []
        assert "estimated: 90" in lint_with_rule(css, DESCENDANTS).diagnostics[0].message

    def test_annotation_overrides_estimate(self, lint_with_rule):
        css = "/* @descendants: 10 */\ndiv { isolation: isolate; }"

        assert lint_with_rule(css, DESCENDANTS).diagnostics == []

    def test_annotation_above_threshold(self, lint_with_rule):
        css = "/* @descendants: 500 */\n#app { isolation: isolate; }"
        result = lint_with_rule(css, DESCENDANTS)

        assert "estimated: 500" in result.diagnostics[0].message

    def test_severity_option(self, lint_with_rule):
        result = lint_with_rule("div { isolation: isolate; }", DESCENDANTS, severity="warning")

        assert result.diagnostics[0].severity == Severity.WARNING
        assert not result.errored
