"""Built-in conversion tables, keyed by base unit.

These are plain data. Users extend them at runtime through custom unit
definitions; nothing here is consulted once a custom definition with the
same target key exists.
"""

from __future__ import annotations

import logging

from unitprefs.core.date_formats import DATE_FORMATS, EPOCH_SECONDS, LOCAL_SUFFIX, DateFormat
from unitprefs.models.units import ConversionDefinition, UnitMetadata

logger = logging.getLogger(__name__)

RFC3339 = "RFC 3339 (UTC)"
ISO8601 = "ISO-8601 (UTC)"
EPOCH_SECONDS_UNIT = "Epoch Seconds"
EPOCH_MILLIS_UNIT = "Epoch Milliseconds"

TIMESTAMP_BASE_UNITS = (RFC3339, ISO8601, EPOCH_SECONDS_UNIT, EPOCH_MILLIS_UNIT)
BOOLEAN_UNIT = "bool"


def _conv(formula: str, inverse: str, symbol: str, long_name: str | None = None) -> ConversionDefinition:
    return ConversionDefinition(
        formula=formula, inverse_formula=inverse, symbol=symbol, long_name=long_name
    )


def _same(symbol: str, long_name: str | None = None) -> ConversionDefinition:
    return _conv("value", "value", symbol, long_name)


def _duration(name: str, long_name: str) -> ConversionDefinition:
    # display-only; there is no way back from a formatted string
    return _conv(f"{name}(value)", "value", "", long_name)


STANDARD_UNITS: dict[str, UnitMetadata] = {
    "m/s": UnitMetadata(base_unit="m/s", category="speed", conversions={
        "m/s": _same("m/s", "Meters per second"),
        "knots": _conv("value * 1.94384", "value * 0.514444", "kn", "Knots"),
        "km/h": _conv("value * 3.6", "value / 3.6", "km/h", "Kilometers per hour"),
        "mph": _conv("value * 2.23694", "value * 0.44704", "mph", "Miles per hour"),
        "ft/s": _conv("value * 3.28084", "value * 0.3048", "ft/s", "Feet per second"),
    }),
    "K": UnitMetadata(base_unit="K", category="temperature", conversions={
        "K": _same("K", "Kelvin"),
        "celsius": _conv("value - 273.15", "value + 273.15", "°C", "Celsius"),
        "fahrenheit": _conv("(value - 273.15) * 9/5 + 32", "(value - 32) * 5/9 + 273.15", "°F", "Fahrenheit"),
    }),
    "Pa": UnitMetadata(base_unit="Pa", category="pressure", conversions={
        "Pa": _same("Pa", "Pascal"),
        "hPa": _conv("value * 0.01", "value * 100", "hPa", "Hectopascal"),
        "mbar": _conv("value * 0.01", "value * 100", "mbar", "Millibar"),
        "kPa": _conv("value * 0.001", "value * 1000", "kPa", "Kilopascal"),
        "bar": _conv("value / 100000", "value * 100000", "bar", "Bar"),
        "inHg": _conv("value / 3386.389", "value * 3386.389", "inHg", "Inches of mercury"),
        "mmHg": _conv("value / 133.322", "value * 133.322", "mmHg", "Millimeters of mercury"),
        "psi": _conv("value / 6894.757", "value * 6894.757", "psi", "Pounds per square inch"),
        "atm": _conv("value / 101325", "value * 101325", "atm", "Atmospheres"),
    }),
    "m": UnitMetadata(base_unit="m", category="distance", conversions={
        "m": _same("m", "Meters"),
        "km": _conv("value * 0.001", "value * 1000", "km", "Kilometers"),
        "nm": _conv("value / 1852", "value * 1852", "nm", "Nautical miles"),
        "mi": _conv("value / 1609.344", "value * 1609.344", "mi", "Miles"),
        "ft": _conv("value / 0.3048", "value * 0.3048", "ft", "Feet"),
        "yd": _conv("value / 0.9144", "value * 0.9144", "yd", "Yards"),
        "fathom": _conv("value / 1.8288", "value * 1.8288", "fathom", "Fathoms"),
        "cm": _conv("value * 100", "value / 100", "cm", "Centimeters"),
        "mm": _conv("value * 1000", "value / 1000", "mm", "Millimeters"),
    }),
    "rad": UnitMetadata(base_unit="rad", category="angle", conversions={
        "rad": _same("rad", "Radians"),
        "deg": _conv("value * 57.29577951308232", "value / 57.29577951308232", "°", "Degrees"),
    }),
    "deg": UnitMetadata(base_unit="deg", category="angle", conversions={
        "deg": _same("°", "Degrees"),
        "rad": _conv("value / 57.29577951308232", "value * 57.29577951308232", "rad", "Radians"),
    }),
    "rad/s": UnitMetadata(base_unit="rad/s", category="angularVelocity", conversions={
        "rad/s": _same("rad/s", "Radians per second"),
        "deg/s": _conv("value * 57.29577951308232", "value / 57.29577951308232", "°/s", "Degrees per second"),
        "deg/min": _conv("value * 3437.746770784939", "value / 3437.746770784939", "°/min", "Degrees per minute"),
        "rpm": _conv("value * 9.549296585513721", "value / 9.549296585513721", "rpm", "Revolutions per minute"),
    }),
    "m3": UnitMetadata(base_unit="m3", category="volume", conversions={
        "m3": _same("m³", "Cubic meters"),
        "L": _conv("value * 1000", "value / 1000", "L", "Liters"),
        "gal": _conv("value * 264.172052", "value / 264.172052", "gal", "US gallons"),
        "gal(UK)": _conv("value * 219.969248", "value / 219.969248", "gal(UK)", "Imperial gallons"),
    }),
    "m3/s": UnitMetadata(base_unit="m3/s", category="volumeRate", conversions={
        "m3/s": _same("m³/s", "Cubic meters per second"),
        "L/min": _conv("value * 60000", "value / 60000", "L/min", "Liters per minute"),
        "L/h": _conv("value * 3600000", "value / 3600000", "L/h", "Liters per hour"),
        "gal/min": _conv("value * 15850.3231", "value / 15850.3231", "gal/min", "US gallons per minute"),
        "gal/h": _conv("value * 951019.388", "value / 951019.388", "gal/h", "US gallons per hour"),
    }),
    "V": UnitMetadata(base_unit="V", category="voltage", conversions={
        "V": _same("V", "Volts"),
        "mV": _conv("value * 1000", "value / 1000", "mV", "Millivolts"),
    }),
    "A": UnitMetadata(base_unit="A", category="current", conversions={
        "A": _same("A", "Amperes"),
        "mA": _conv("value * 1000", "value / 1000", "mA", "Milliamperes"),
    }),
    "W": UnitMetadata(base_unit="W", category="power", conversions={
        "W": _same("W", "Watts"),
        "kW": _conv("value / 1000", "value * 1000", "kW", "Kilowatts"),
        "hp": _conv("value / 745.699872", "value * 745.699872", "hp", "Horsepower"),
    }),
    "J": UnitMetadata(base_unit="J", category="energy", conversions={
        "J": _same("J", "Joules"),
        "kJ": _conv("value / 1000", "value * 1000", "kJ", "Kilojoules"),
        "Wh": _conv("value / 3600", "value * 3600", "Wh", "Watt hours"),
        "kWh": _conv("value / 3600000", "value * 3600000", "kWh", "Kilowatt hours"),
    }),
    "C": UnitMetadata(base_unit="C", category="charge", conversions={
        "C": _same("C", "Coulombs"),
        "Ah": _conv("value / 3600", "value * 3600", "Ah", "Amp hours"),
        "mAh": _conv("value / 3.6", "value * 3.6", "mAh", "Milliamp hours"),
    }),
    "Hz": UnitMetadata(base_unit="Hz", category="frequency", conversions={
        "Hz": _same("Hz", "Hertz"),
        "kHz": _conv("value / 1000", "value * 1000", "kHz", "Kilohertz"),
        "rpm": _conv("value * 60", "value / 60", "rpm", "Revolutions per minute"),
    }),
    "s": UnitMetadata(base_unit="s", category="time", conversions={
        "s": _same("s", "Seconds"),
        "min": _conv("value / 60", "value * 60", "min", "Minutes"),
        "h": _conv("value / 3600", "value * 3600", "h", "Hours"),
        "d": _conv("value / 86400", "value * 86400", "d", "Days"),
        "duration-dhms": _duration("formatDurationDHMS", "DD:HH:MM:SS"),
        "duration-hms": _duration("formatDurationHMS", "HH:MM:SS"),
        "duration-hms-millis": _duration("formatDurationHMSMillis", "HH:MM:SS.mmm"),
        "duration-ms": _duration("formatDurationMS", "MM:SS"),
        "duration-ms-millis": _duration("formatDurationMSMillis", "MM:SS.mmm"),
        "duration-verbose": _duration("formatDurationVerbose", "Verbose duration"),
        "duration-compact": _duration("formatDurationCompact", "Compact duration"),
    }),
    "ratio": UnitMetadata(base_unit="ratio", category="percentage", conversions={
        "ratio": _same("", "Ratio"),
        "percent": _conv("value * 100", "value / 100", "%", "Percent"),
    }),
    "kg": UnitMetadata(base_unit="kg", category="mass", conversions={
        "kg": _same("kg", "Kilograms"),
        "lb": _conv("value * 2.20462262", "value / 2.20462262", "lb", "Pounds"),
        "t": _conv("value / 1000", "value * 1000", "t", "Metric tons"),
    }),
    "m2": UnitMetadata(base_unit="m2", category="area", conversions={
        "m2": _same("m²", "Square meters"),
        "ft2": _conv("value * 10.7639104", "value / 10.7639104", "ft²", "Square feet"),
    }),
    RFC3339: UnitMetadata(base_unit=RFC3339, category="dateTime", conversions={}),
    ISO8601: UnitMetadata(base_unit=ISO8601, category="dateTime", conversions={}),
    EPOCH_SECONDS_UNIT: UnitMetadata(base_unit=EPOCH_SECONDS_UNIT, category="epoch", conversions={}),
    EPOCH_MILLIS_UNIT: UnitMetadata(base_unit=EPOCH_MILLIS_UNIT, category="epoch", conversions={}),
    BOOLEAN_UNIT: UnitMetadata(base_unit=BOOLEAN_UNIT, category="boolean", conversions={
        BOOLEAN_UNIT: _same("", "Boolean"),
    }),
}

CATEGORY_TO_BASE_UNIT: dict[str, str] = {
    "speed": "m/s",
    "temperature": "K",
    "pressure": "Pa",
    "distance": "m",
    "depth": "m",
    "length": "m",
    "angle": "rad",
    "angularVelocity": "rad/s",
    "volume": "m3",
    "volumeRate": "m3/s",
    "voltage": "V",
    "current": "A",
    "power": "W",
    "energy": "J",
    "charge": "C",
    "frequency": "Hz",
    "time": "s",
    "percentage": "ratio",
    "mass": "kg",
    "area": "m2",
    "dateTime": RFC3339,
    "epoch": EPOCH_SECONDS_UNIT,
    "boolean": BOOLEAN_UNIT,
}

# path -> base unit; metadata for these is known without any inference
KNOWN_PATHS: dict[str, tuple[str, str]] = {
    "navigation.speedOverGround": ("m/s", "speed"),
    "navigation.speedThroughWater": ("m/s", "speed"),
    "environment.wind.speedApparent": ("m/s", "speed"),
    "environment.wind.speedTrue": ("m/s", "speed"),
    "environment.outside.temperature": ("K", "temperature"),
    "environment.water.temperature": ("K", "temperature"),
    "environment.outside.pressure": ("Pa", "pressure"),
    "environment.depth.belowKeel": ("m", "depth"),
    "environment.depth.belowTransducer": ("m", "depth"),
    "environment.depth.belowSurface": ("m", "depth"),
    "navigation.courseGreatCircle.nextPoint.distance": ("m", "distance"),
    "design.length.overall": ("m", "length"),
    "design.beam": ("m", "length"),
    "design.draft.maximum": ("m", "depth"),
    "navigation.headingTrue": ("rad", "angle"),
    "navigation.headingMagnetic": ("rad", "angle"),
    "navigation.courseOverGroundTrue": ("rad", "angle"),
    "navigation.rateOfTurn": ("rad/s", "angularVelocity"),
    "navigation.position.latitude": ("deg", "angle"),
    "navigation.position.longitude": ("deg", "angle"),
    "navigation.datetime": (RFC3339, "dateTime"),
    "electrical.batteries.0.voltage": ("V", "voltage"),
    "electrical.batteries.0.current": ("A", "current"),
    "electrical.batteries.0.capacity.stateOfCharge": ("ratio", "percentage"),
    "electrical.solar.0.panelPower": ("W", "power"),
    "tanks.fuel.0.currentLevel": ("ratio", "percentage"),
    "tanks.fuel.0.currentVolume": ("m3", "volume"),
    "propulsion.main.revolutions": ("Hz", "frequency"),
    "propulsion.main.runTime": ("s", "time"),
}


def _date_conversions(formats: dict[str, DateFormat]) -> dict[str, ConversionDefinition]:
    conversions: dict[str, ConversionDefinition] = {}
    for key, fmt in formats.items():
        conversions[key] = ConversionDefinition(
            formula="value", inverse_formula="value", symbol="",
            long_name=fmt.description, date_format=key, use_local_time=False,
        )
        if key != EPOCH_SECONDS:
            conversions[key + LOCAL_SUFFIX] = ConversionDefinition(
                formula="value", inverse_formula="value", symbol="",
                long_name=f"{fmt.description} (local time)", date_format=key, use_local_time=True,
            )
    return conversions


class BuiltinDefaults:
    """Read-only access to the built-in tables.

    Timestamp base units get one conversion per named date format (plus a
    ``-local`` twin) appended on every lookup.
    """

    def __init__(
        self,
        standard_units: dict[str, UnitMetadata] | None = None,
        category_map: dict[str, str] | None = None,
        date_formats: dict[str, DateFormat] | None = None,
    ) -> None:
        self._units = standard_units if standard_units is not None else STANDARD_UNITS
        self._categories = category_map if category_map is not None else CATEGORY_TO_BASE_UNIT
        self._date_formats = date_formats if date_formats is not None else DATE_FORMATS

    def get_conversions_for_base_unit(self, base_unit: str) -> UnitMetadata | None:
        entry = self._units.get(base_unit)
        if entry is None:
            return None
        meta = entry.model_copy(deep=True)
        if base_unit in TIMESTAMP_BASE_UNITS:
            for key, conv in _date_conversions(self._date_formats).items():
                meta.conversions.setdefault(key, conv)
        return meta

    def get_category_to_base_unit_map(self) -> dict[str, str]:
        return dict(self._categories)

    def base_units(self) -> list[str]:
        return list(self._units)

    def known_path_metadata(self) -> dict[str, UnitMetadata]:
        """Metadata for the well-known paths in KNOWN_PATHS."""
        known: dict[str, UnitMetadata] = {}
        for path, (base_unit, category) in KNOWN_PATHS.items():
            meta = self.get_conversions_for_base_unit(base_unit)
            if meta is None:
                logger.warning("Known path %s refers to unknown base unit %s", path, base_unit)
                continue
            meta.category = category
            known[path] = meta
        return known
