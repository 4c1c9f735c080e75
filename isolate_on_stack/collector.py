"""Per-selector collection of stacking-relevant properties."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .linter_logging import LogCategory, get_category_logger
from .models import Declaration, RuleBlock, Stylesheet
from .stacking import STACKING_CONTEXT_PROPERTIES

logger = get_category_logger(LogCategory.RULES)


class PropertyMap(Mapping):
    """Read-only map of property name to the last declared value.

    Only stacking-relevant properties are kept. The declaration that
    supplied each value is retained for reporting.
    """

    def __init__(
        self,
        selector: str,
        declarations: Mapping[str, Declaration] | None = None,
        parent_display: str | None = None,
    ):
        self.selector = selector
        self._declarations = dict(declarations or {})
        self.parent_display = parent_display.strip().lower() if parent_display else None

    def __getitem__(self, name: str) -> str:
        return self._declarations[name].value

    def __iter__(self) -> Iterator[str]:
        return iter(self._declarations)

    def __len__(self) -> int:
        return len(self._declarations)

    def declaration(self, name: str) -> Declaration | None:
        """Get the declaration that supplied a property's value."""
        return self._declarations.get(name)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PropertyMap):
            return (
                self.selector == other.selector
                and dict(self) == dict(other)
                and self.parent_display == other.parent_display
            )
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PropertyMap({self.selector!r}, {dict(self)!r})"


def selector_key(selector: str) -> str:
    """Key used to group rule blocks: outer whitespace removed only."""
    return selector.strip()


class PropertyCollector:
    """Builds per-selector property maps from a parsed stylesheet.

    Collection is pure: the stylesheet is only read, and each call
    builds fresh maps.
    """

    def __init__(self, properties: frozenset[str] = STACKING_CONTEXT_PROPERTIES):
        self.properties = properties

    def collect(
        self,
        stylesheet: Stylesheet,
        parent_displays: Mapping[str, str] | None = None,
    ) -> Mapping[str, PropertyMap]:
        """Collect properties per selector in document order.

        Blocks sharing a selector merge into one map; a later declaration
        of the same property overwrites an earlier one.

        Args:
            stylesheet: Parsed stylesheet.
            parent_displays: Optional selector to parent display mapping,
                combined with `@parent-display` annotations.

        Returns:
            Immutable mapping of selector text to PropertyMap.
        """
        parent_displays = parent_displays or {}
        declarations: dict[str, dict[str, Declaration]] = {}
        displays: dict[str, str] = {}

        for block in stylesheet.rules:
            key = selector_key(block.selector)
            collected = declarations.setdefault(key, {})
            self._collect_into(block, collected)
            if block.parent_display:
                displays[key] = block.parent_display

        displays.update({selector_key(k): v for k, v in parent_displays.items()})

        maps = {
            key: PropertyMap(key, collected, displays.get(key))
            for key, collected in declarations.items()
        }
        logger.debug(f"Collected properties for {len(maps)} selector(s)")
        return MappingProxyType(maps)

    def collect_block(self, block: RuleBlock) -> PropertyMap:
        """Collect properties for a single rule block."""
        collected: dict[str, Declaration] = {}
        self._collect_into(block, collected)
        return PropertyMap(selector_key(block.selector), collected, block.parent_display)

    def _collect_into(self, block: RuleBlock, collected: dict[str, Declaration]) -> None:
        for decl in block.declarations:
            if decl.name in self.properties:
                collected[decl.name] = decl
