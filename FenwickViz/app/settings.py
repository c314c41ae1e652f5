import copy


available_settings = {}

# Bounds of the array length slider
available_settings['length'] = (1, 64)

# Bounds of every font size slider
available_settings['font_size'] = (4.0, 64.0)

# Policy for the displayed prefix sum after an update
available_settings['clear_answer_on_update'] = [False, True]


DEFAULT_SETTINGS = {
    'length': 16,
    'min_length': 1,
    'max_length': 64,
    'value_range': (-100, 100),
    'clear_answer_on_update': False,
    'font_sizes': {'index': 14.0, 'array': 16.0, 'fenwick': 14.0},
}


def make_settings(**overrides):
    """
    Returns a copy of :data:`DEFAULT_SETTINGS` updated with *overrides*.

    ``font_sizes`` may be given partially; missing entries keep their default.

    :raises KeyError: If an override is not a known setting.
    :raises AssertionError: If a value is outside its allowed range.
    """
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    for key, value in overrides.items():
        if key not in settings:
            raise KeyError(f"Unknown setting {key!r}")
        if key == 'font_sizes':
            for name in value:
                if name not in settings['font_sizes']:
                    raise KeyError(f"Unknown font size {name!r}")
            settings['font_sizes'].update(value)
        else:
            settings[key] = value

    lo, hi = available_settings['length']
    assert lo <= settings['min_length'] <= settings['max_length'] <= hi, "Length bounds must satisfy 1 <= min_length <= max_length <= 64"
    assert settings['min_length'] <= settings['length'] <= settings['max_length'], "The initial length must lie within the length bounds"
    assert settings['value_range'][0] <= settings['value_range'][1], "The value range must not be empty"
    assert settings['clear_answer_on_update'] in available_settings['clear_answer_on_update']
    flo, fhi = available_settings['font_size']
    for name, size in settings['font_sizes'].items():
        assert flo <= size <= fhi, f"Font size {name!r} must be between {flo} and {fhi}"
    return settings
