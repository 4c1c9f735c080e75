"""Diagnostic message catalog."""

RULE_NAMESPACE = "isolate-on-stack"


def rule_name(short_name: str) -> str:
    """Fully qualified rule id for a short rule name."""
    return f"{RULE_NAMESPACE}/{short_name}"


def z_index_range(value: int, max_z_index: int) -> str:
    return f"z-index value '{value}' exceeds the allowed range (maximum: {max_z_index})."


def no_redundant_declaration(trigger: str | None) -> str:
    cause = trigger or "another property"
    return (
        "Redundant 'isolation: isolate'. A stacking context is already "
        f"created by '{cause}'."
    )


INEFFECTIVE_ON_BACKGROUND_BLEND = (
    "Ineffective 'isolation: isolate'. This property does not affect "
    "background-blend-mode which operates on background layers within the element."
)


def prefer_over_side_effects(prop: str, value: str) -> str:
    return (
        f"Avoid relying on the side effects of '{prop}: {value}' to create a "
        "stacking context. Consider 'isolation: isolate' instead."
    )


def performance_high_descendant_count(selector: str, count: int) -> str:
    return (
        f"Stacking context element '{selector}' may have a high number of "
        f"descendants (estimated: {count}), which could impact performance."
    )


EXPECTED_ISOLATION = (
    "Expected 'isolation: isolate' when using 'position' and 'z-index'."
)


def required_class(class_name: str) -> str:
    return f"Expected 'isolation: isolate' on elements with required class '{class_name}'."


def redundant_with_existing_context(trigger: str | None) -> str:
    cause = trigger or "another property"
    return (
        "'isolation: isolate' is redundant because a stacking context already "
        f"exists ('{cause}')."
    )


def pseudo_element_isolation(selector: str) -> str:
    return (
        f"'isolation: isolate' has no effect on pseudo-elements ('{selector}')."
    )


def rule_crashed(error: Exception) -> str:
    return f"Rule failed: {type(error).__name__}: {error}"
