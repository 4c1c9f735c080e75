"""Apply autofix insertions to stylesheet source text.

Each `Fix` names the declaration after which its text is inserted.
Edits are applied back to front so earlier offsets stay valid.
"""

from .linter_logging import LogCategory, get_category_logger
from .models import Diagnostic, Fix

logger = get_category_logger(LogCategory.RULES)


def _line_offsets(source: str) -> list[int]:
    offsets = [0]
    for index, char in enumerate(source):
        if char == "\n":
            offsets.append(index + 1)
    return offsets


def _to_offset(source: str, line: int, column: int) -> int | None:
    offsets = _line_offsets(source)
    if line < 1 or line > len(offsets):
        return None
    offset = offsets[line - 1] + column - 1
    return offset if 0 <= offset <= len(source) else None


def _find_declaration_end(source: str, start: int) -> tuple[int, str] | None:
    """Find the `;` or `}` that ends the declaration starting at `start`.

    Parentheses, brackets, strings and comments are skipped.
    """
    depth = 0
    index = start
    quote = None
    while index < len(source):
        char = source[index]
        if quote:
            if char == "\\":
                index += 2
                continue
            if char == quote:
                quote = None
        elif source.startswith("/*", index):
            end = source.find("*/", index + 2)
            if end == -1:
                return None
            index = end + 2
            continue
        elif char in "\"'":
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth = max(0, depth - 1)
        elif depth == 0 and char in ";}":
            return index, char
        index += 1
    return None


def _indentation(source: str, offset: int) -> str | None:
    """Leading whitespace of the declaration's line, or None if it shares the line."""
    line_start = source.rfind("\n", 0, offset) + 1
    prefix = source[line_start:offset]
    if prefix.strip():
        return None
    return prefix


def _insertion(source: str, fix: Fix) -> tuple[int, str] | None:
    start = _to_offset(source, fix.line, fix.column)
    if start is None:
        return None
    found = _find_declaration_end(source, start)
    if found is None:
        return None

    end, terminator = found
    indent = _indentation(source, start)

    if terminator == ";":
        if indent is None:
            return end + 1, f" {fix.text};"
        return end + 1, f"\n{indent}{fix.text};"

    # Last declaration without a trailing semicolon
    value_end = end
    while value_end > start and source[value_end - 1].isspace():
        value_end -= 1
    if indent is None:
        return value_end, f"; {fix.text}"
    return value_end, f";\n{indent}{fix.text}"


def apply_fixes(source: str, fixes: list[Fix]) -> str:
    """Apply fixes to source text.

    Duplicate fixes are applied once; fixes that cannot be located are
    skipped with a warning.

    Args:
        source: Original stylesheet text.
        fixes: Insertions to apply.

    Returns:
        Fixed source text.
    """
    edits = {}
    for fix in dict.fromkeys(fixes):
        edit = _insertion(source, fix)
        if edit is None:
            logger.warning(f"Could not apply fix at {fix.line}:{fix.column}")
            continue
        edits.setdefault(edit[0], edit[1])

    for offset in sorted(edits, reverse=True):
        source = source[:offset] + edits[offset] + source[offset:]
    return source


def fixes_for(diagnostics: list[Diagnostic]) -> list[Fix]:
    """Fixes carried by diagnostics, in order."""
    return [d.fix for d in diagnostics if d.fix is not None]
