import pytest
from unitprefs.core.conversion.engine import UnitsEngine
from unitprefs.core.defaults import BuiltinDefaults
from unitprefs.core.live_metadata import LiveMetadataStore
from unitprefs.core.preferences import PreferenceStore
from unitprefs.models.units import UnitsPreferences


@pytest.fixture
def defaults():
    return BuiltinDefaults()


@pytest.fixture
def store():
    """A store with no preferences at all."""
    return PreferenceStore(UnitsPreferences())


@pytest.fixture
def live():
    return LiveMetadataStore()


@pytest.fixture
def engine(store, defaults, live):
    eng = UnitsEngine(store, defaults, live, local_timezone="UTC")
    eng.bind(store.on_change)
    return eng
