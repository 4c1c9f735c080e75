"""Stylesheet adapter built on tinycss2.

Turns CSS text into the immutable `Stylesheet` model the rules read.
Rule blocks nested in conditional at-rules (@media, @supports, ...)
or in CSS-nesting parents are flattened in document order.
"""

import re

import tinycss2
import tinycss2.ast

from .linter_logging import LogCategory, get_category_logger
from .models import Declaration, RuleBlock, SourceLocation, Stylesheet
from .selectors import split_selector_list

logger = get_category_logger(LogCategory.PARSER)

# At-rules whose block contains further rule blocks
GROUPING_AT_RULES = frozenset(
    ["media", "supports", "layer", "container", "document", "scope", "starting-style"]
)

# /* @parent-display: flex */  or  /* @descendants: 150 */
ANNOTATION_PATTERN = re.compile(r"@(parent-display|descendants)\s*:\s*([\w-]+)", re.I)


def parse_stylesheet(css: str, file_path: str | None = None) -> Stylesheet:
    """Parse CSS text into a Stylesheet.

    Args:
        css: Stylesheet source text.
        file_path: Optional path used in diagnostic locations.

    Returns:
        Stylesheet with rule blocks in document order.
    """
    nodes = tinycss2.parse_stylesheet(css, skip_comments=False, skip_whitespace=True)
    rules: list[RuleBlock] = []
    _collect_rules(nodes, file_path, rules, top_level=True)
    logger.debug(f"Parsed {len(rules)} rule block(s) from {file_path or '<input>'}")
    return Stylesheet(rules=tuple(rules), file_path=file_path, source=css)


def parse_annotations(comment: str) -> dict[str, str]:
    """Extract `@name: value` annotations from a comment body."""
    return {
        match.group(1).lower(): match.group(2)
        for match in ANNOTATION_PATTERN.finditer(comment)
    }


def resolve_nested_selector(parent: str, selector: str) -> str:
    """Resolve a CSS-nesting selector against its parent rule's selector.

    `&` stands for the parent; a selector without `&` is a descendant of
    it. Both sides may be selector lists.

    Example:
        >>> resolve_nested_selector(".a, .b", "&:hover, .c")
        '.a:hover, .b:hover, .a .c, .b .c'
    """
    parents = split_selector_list(parent)
    resolved = []
    for part in split_selector_list(selector):
        for outer in parents:
            if "&" in part:
                resolved.append(part.replace("&", outer))
            else:
                resolved.append(f"{outer} {part}")
    return ", ".join(resolved)


def _collect_rules(
    nodes: list,
    file_path: str | None,
    rules: list[RuleBlock],
    top_level: bool = False,
    parent_selector: str | None = None,
) -> None:
    """Walk a node list, appending rule blocks in document order.

    `parent_selector` is set while walking the body of a nesting rule.
    """
    pending_annotations: dict[str, str] = {}

    for node in nodes:
        if isinstance(node, tinycss2.ast.WhitespaceToken):
            continue

        if isinstance(node, tinycss2.ast.Comment):
            annotations = parse_annotations(node.value)
            if annotations:
                pending_annotations.update(annotations)
            continue

        if isinstance(node, tinycss2.ast.QualifiedRule):
            _collect_rule(node, file_path, rules, pending_annotations, parent_selector)
        elif isinstance(node, tinycss2.ast.AtRule):
            if node.lower_at_keyword in GROUPING_AT_RULES and node.content is not None:
                children = tinycss2.parse_blocks_contents(
                    node.content, skip_comments=False, skip_whitespace=True
                )
                _collect_rules(children, file_path, rules, parent_selector=parent_selector)
        elif isinstance(node, tinycss2.ast.ParseError):
            logger.warning(
                f"{file_path or '<input>'}:{node.source_line}:{node.source_column} "
                f"skipping unparseable CSS ({node.kind}: {node.message})"
            )
        elif not top_level and isinstance(node, tinycss2.ast.Declaration):
            # Declarations directly inside @media etc. have no selector
            logger.debug(f"Ignoring declaration outside of a rule: {node.name}")

        pending_annotations = {}


def _selector_text(prelude: list) -> str:
    """Serialize a rule prelude without comments.

    Whitespace on both sides of a dropped comment collapses to one token.
    """
    tokens = []
    for token in prelude:
        if token.type == "comment":
            continue
        if token.type == "whitespace" and tokens and tokens[-1].type == "whitespace":
            continue
        tokens.append(token)
    return tinycss2.serialize(tokens).strip()


def _collect_rule(
    rule: "tinycss2.ast.QualifiedRule",
    file_path: str | None,
    rules: list[RuleBlock],
    annotations: dict[str, str],
    parent_selector: str | None = None,
) -> None:
    """Convert one qualified rule (and any rules nested in it)."""
    selector = _selector_text(rule.prelude)
    if selector and parent_selector:
        selector = resolve_nested_selector(parent_selector, selector)
    contents = tinycss2.parse_blocks_contents(
        rule.content, skip_comments=False, skip_whitespace=True
    )

    declarations = []
    nested = []
    for node in contents:
        if isinstance(node, tinycss2.ast.Declaration):
            declarations.append(_convert_declaration(node, file_path))
        elif isinstance(node, (tinycss2.ast.QualifiedRule, tinycss2.ast.AtRule, tinycss2.ast.Comment)):
            nested.append(node)
        elif isinstance(node, tinycss2.ast.ParseError):
            logger.warning(
                f"{file_path or '<input>'}:{node.source_line}:{node.source_column} "
                f"skipping unparseable declaration ({node.kind}: {node.message})"
            )

    if selector:
        rules.append(
            RuleBlock(
                selector=selector,
                declarations=tuple(declarations),
                location=SourceLocation(file_path, rule.source_line, rule.source_column),
                annotations=dict(annotations),
            )
        )
    else:
        logger.debug(
            f"Skipping rule without selector at {file_path or '<input>'}:{rule.source_line}"
        )

    if nested and selector:
        _collect_rules(nested, file_path, rules, parent_selector=selector)


def _convert_declaration(
    node: "tinycss2.ast.Declaration", file_path: str | None
) -> Declaration:
    return Declaration(
        property=node.name,
        value=tinycss2.serialize(node.value).strip(),
        location=SourceLocation(file_path, node.source_line, node.source_column),
        important=node.important,
    )
