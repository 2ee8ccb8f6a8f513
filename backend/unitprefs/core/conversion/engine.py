"""The facade collaborators call: resolve, select, execute.

There are two conversion entry points with deliberately different failure
policies:

* :meth:`UnitsEngine.select_and_convert` is for streaming. Any UnitsError is
  logged and the raw value is passed through, so one bad custom formula
  cannot stall a data feed.
* :meth:`UnitsEngine.convert_path_value` is for request/response callers.
  Errors propagate typed and the boundary layer maps them to a status.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from unitprefs.core.conversion.executor import execute, plain_text
from unitprefs.core.conversion.results import (
    ConversionMetadata,
    ConversionResult,
    Executed,
    UnitConversionResult,
)
from unitprefs.core.conversion.selector import (
    NONE_UNIT,
    SelectedConversion,
    find_preference,
    lookup_target,
    pass_through,
    select_conversion,
)
from unitprefs.core.providers import (
    BaseUnitDefaultsProvider,
    ChangeHook,
    LiveMetadataProvider,
    PreferenceProvider,
)
from unitprefs.core.resolver.cache import MetadataCache
from unitprefs.core.resolver.resolver import MetadataResolver
from unitprefs.core.resolver.value_types import classify_value, is_date_unit
from unitprefs.errors import (
    ConversionNotFoundError,
    InvalidInputError,
    UnitsError,
    UnresolvableMetadataError,
)
from unitprefs.models.units import (
    IDENTITY,
    ConversionResponse,
    LiveMetadata,
    UnitMetadata,
    ValueKind,
)

logger = logging.getLogger(__name__)


def display_name(path: str, symbol: str) -> str | None:
    return f"{path.rsplit('.', 1)[-1]} ({symbol})" if symbol else None


def _to_number(raw_value: Any) -> Any:
    """Accept numeric strings for ad-hoc conversions; leave everything else alone."""
    if isinstance(raw_value, str) and raw_value.strip():
        try:
            return float(raw_value)
        except ValueError as exc:
            raise InvalidInputError(f"Value must be numeric for this conversion: {raw_value!r}") from exc
    return raw_value


class UnitsEngine:
    def __init__(
        self,
        preferences: PreferenceProvider,
        defaults: BaseUnitDefaultsProvider,
        live: LiveMetadataProvider | None = None,
        known: Mapping[str, UnitMetadata] | None = None,
        *,
        default_display_format: str = "0.0",
        local_timezone: str | None = None,
        cache_enabled: bool = True,
    ) -> None:
        self.preferences = preferences
        self.defaults = defaults
        self.live = live
        self.default_display_format = default_display_format
        self.local_timezone = local_timezone
        self.resolver = MetadataResolver(
            preferences, defaults, live, known, cache=MetadataCache(enabled=cache_enabled)
        )

    # ── Metadata ─────────────────────────────────────────────────────────

    def bind(self, register: Callable[[ChangeHook], None]) -> None:
        """Register cache invalidation with the preference owner's change hooks."""
        self.resolver.bind(register)

    def invalidate(self) -> None:
        self.resolver.invalidate()

    def resolve(self, path: str) -> UnitMetadata | None:
        return self.resolver.resolve(path)

    def _live(self, path: str) -> LiveMetadata | None:
        return self.live.get_metadata(path) if self.live is not None else None

    def _select(self, path: str) -> tuple[SelectedConversion, LiveMetadata | None]:
        ctx = self.resolver.context()
        metadata = self.resolver.resolve(path, ctx)
        live = self._live(path)
        category = metadata.category if metadata is not None else None
        preference = find_preference(path, category, ctx.preferences)
        selection = select_conversion(
            path,
            metadata,
            preference,
            ctx.definitions,
            self.defaults,
            self.default_display_format,
            literal_units=live.units if live is not None else None,
        )
        return selection, live

    def _sample(self, path: str) -> Any:
        return self.live.get_sample(path) if self.live is not None else None

    def _kind(self, path: str, selection: SelectedConversion, raw_value: Any) -> ValueKind:
        if selection.conversion.date_format or is_date_unit(selection.base_unit):
            return ValueKind.DATE
        units = None if selection.base_unit == NONE_UNIT else selection.base_unit
        sample = self._sample(path)
        if sample is None and units is None:
            return classify_value(None, raw_value)
        return classify_value(units, sample)

    def get_conversion(self, path: str) -> ConversionResponse:
        """Conversion metadata for ``path`` without converting anything."""
        selection, live = self._select(path)
        if selection.conversion.date_format:
            value_type = ValueKind.DATE
        else:
            units = None if selection.base_unit == NONE_UNIT else selection.base_unit
            value_type = classify_value(units, self._sample(path))
        return ConversionResponse(
            path=path,
            base_unit=selection.base_unit,
            target_unit=selection.target_unit,
            formula=selection.formula,
            inverse_formula=selection.inverse_formula,
            display_format=selection.display_format,
            symbol=selection.symbol,
            category=selection.category,
            value_type=value_type,
            date_format=selection.conversion.date_format,
            use_local_time=selection.conversion.use_local_time,
            display_name=display_name(path, selection.symbol),
            description=live.description if live is not None else None,
        )

    # ── Path conversions ─────────────────────────────────────────────────

    def _wrap(self, path: str, raw_value: Any, selection: SelectedConversion, executed: Executed) -> ConversionResult:
        return ConversionResult(
            converted=executed.converted,
            formatted=executed.formatted,
            original=raw_value,
            metadata=ConversionMetadata(
                units=selection.target_unit or selection.symbol,
                display_format=executed.display_format,
                description=f"{path} (converted from {selection.base_unit})",
                original_units=selection.base_unit,
                display_name=display_name(path, selection.symbol),
            ),
        )

    def convert_path_value(self, path: str, raw_value: Any) -> ConversionResult:
        """Convert ``raw_value`` for ``path``. Errors propagate typed."""
        selection, _ = self._select(path)
        kind = self._kind(path, selection, raw_value)
        executed = execute(kind, raw_value, selection, tz_name=self.local_timezone)
        return self._wrap(path, raw_value, selection, executed)

    def select_and_convert(self, path: str, raw_value: Any) -> ConversionResult:
        """Convert ``raw_value`` for ``path``, passing it through unchanged on any error."""
        try:
            return self.convert_path_value(path, raw_value)
        except UnitsError as exc:
            logger.warning("Conversion of %s failed, passing value through: %s", path, exc)

        metadata = self.resolver.resolve(path)
        selection = pass_through(
            metadata.base_unit if metadata is not None else None,
            metadata.category if metadata is not None else None,
            self.default_display_format,
        )
        executed = Executed(raw_value, plain_text(raw_value), classify_value(None, raw_value), selection.display_format)
        return self._wrap(path, raw_value, selection, executed)

    # ── Ad-hoc conversions ───────────────────────────────────────────────

    def convert_unit_value(
        self,
        base_unit: str,
        target_unit: str,
        raw_value: Any,
        display_format: str | None = None,
        use_local_time: bool | None = None,
    ) -> UnitConversionResult:
        """Convert a value between two units without any path involved."""
        ctx = self.resolver.context()
        if not base_unit or not ctx.is_known_base_unit(base_unit):
            raise UnresolvableMetadataError(f"Unknown base unit: {base_unit}")

        conversions = ctx.merged_conversions(base_unit)
        found = lookup_target(target_unit, [conversions])
        if found is not None:
            key, conversion = found
        elif target_unit == base_unit:
            key, conversion = base_unit, IDENTITY.model_copy(update={"symbol": base_unit})
        else:
            raise ConversionNotFoundError(f"No conversion defined from {base_unit} to {target_unit}")

        selection = SelectedConversion(
            base_unit=base_unit,
            target_unit=key,
            conversion=conversion,
            category=ctx.category_for_base_unit(base_unit) or "custom",
            display_format=display_format or self.default_display_format,
        )

        if isinstance(raw_value, bool):
            kind = ValueKind.BOOLEAN
        elif conversion.date_format or is_date_unit(base_unit) or "epoch" in base_unit.lower():
            kind = ValueKind.DATE
        else:
            kind = ValueKind.NUMBER
            raw_value = _to_number(raw_value)

        executed = execute(kind, raw_value, selection, use_local_time=use_local_time, tz_name=self.local_timezone)
        return UnitConversionResult(
            converted_value=executed.converted,
            formatted=executed.formatted,
            symbol=selection.symbol,
            display_format=executed.display_format,
            value_type=executed.value_type,
            date_format=executed.date_format,
            use_local_time=executed.use_local_time,
        )
