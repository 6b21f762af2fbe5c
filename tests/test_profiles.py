import pytest

from autoclicker.preferences import PreferenceStore
from autoclicker.profiles import (
    PROFILE_COUNT,
    Profile,
    ProfileStore,
    interval_key,
    name_key,
)


def test_fresh_load_yields_defaults(prefs_path):
    store = ProfileStore(PreferenceStore(prefs_path))
    store.load()

    assert store.profiles == [
        Profile('Default', '30'),
        Profile('Profile 1', ''),
        Profile('Profile 2', ''),
        Profile('Profile 3', ''),
    ]


@pytest.mark.parametrize('index', range(PROFILE_COUNT))
def test_save_then_load_in_fresh_store(prefs_path, index):
    store = ProfileStore(PreferenceStore(prefs_path))
    store.load()
    store.get(index).name = f"Farm {index}"
    store.get(index).interval = f"{index + 1}.5"
    store.save(index)

    reloaded = ProfileStore(PreferenceStore(prefs_path))
    reloaded.load()

    assert reloaded.get(index) == Profile(f"Farm {index}", f"{index + 1}.5")


def test_save_writes_only_that_slot(prefs_path):
    store = ProfileStore(PreferenceStore(prefs_path))
    store.get(0).name = 'Changed but unsaved'
    store.get(2).name = 'Fishing'
    store.get(2).interval = '12'
    store.save(2)

    prefs = PreferenceStore(prefs_path)
    assert prefs.get_string(name_key(2)) == 'Fishing'
    assert prefs.get_string(interval_key(2)) == '12'
    assert prefs.get_string(name_key(0)) is None


def test_empty_saved_values_keep_defaults(prefs_path):
    PreferenceStore(prefs_path).set_many({
        name_key(0): '',
        interval_key(0): '',
        name_key(1): 'Mining',
    })

    store = ProfileStore(PreferenceStore(prefs_path))
    store.load()

    assert store.get(0) == Profile('Default', '30')
    assert store.get(1) == Profile('Mining', '')


def test_out_of_range_index(prefs_path):
    store = ProfileStore(PreferenceStore(prefs_path))
    with pytest.raises(IndexError):
        store.get(PROFILE_COUNT)
    with pytest.raises(IndexError):
        store.save(-1)


def test_profiles_list_is_stable_across_load(prefs_path):
    store = ProfileStore(PreferenceStore(prefs_path))
    profiles = store.profiles
    store.load()
    assert store.profiles is profiles
