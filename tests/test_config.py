import logging

import pytest

from chip8vm.config import EmulatorConfig


def test_defaults():
    config = EmulatorConfig()

    assert config.scale == 10
    assert config.cycles_per_frame == 10
    assert config.log_level == logging.WARNING
    assert config.quirks() == {'shift_quirk': False, 'load_store_quirk': False}


@pytest.mark.parametrize('options', [{'scale': 0}, {'cycles_per_frame': 0}, {'delay': -1}])
def test_rejects_bad_values(options):
    with pytest.raises(ValueError):
        EmulatorConfig(**options)


def test_to_dict():
    assert EmulatorConfig(scale=3).to_dict()['scale'] == 3
