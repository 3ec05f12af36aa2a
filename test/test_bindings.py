import math

import pytest

from freight_lite_teleop import BindingTable, ConfigurationError, Mode, bindings_from_parameters


def test_negative_indices_mean_disabled():
    table = BindingTable(
        axis_index={'x': -1, 'yaw': 0},
        enable_button_index={'drive': 0, 'horiz': -1},
        adjust_axis_front_index=-1,
        adjust_axis_back_index=None,
        steering_delta_axis_index=3,
    )
    assert table.axis_index('x') is None
    assert table.axis_index('yaw') == 0
    assert table.enable_button_index(Mode.DRIVE) == 0
    assert table.enable_button_index(Mode.HORIZ) is None
    assert table.enable_button_index(Mode.TWIST) is None
    assert table.adjust_front_index() is None
    assert table.adjust_back_index() is None
    assert table.steering_delta_index() == 3


def test_missing_scale_defaults_to_zero():
    table = BindingTable(axis_index={'x': 1}, scale={('drive', 'x'): 0.7})
    assert math.isclose(table.scale(Mode.DRIVE, 'x'), 0.7)
    assert table.scale(Mode.DRIVE, 'yaw') == 0.0
    assert table.scale(Mode.TWIST, 'x') == 0.0


def test_modes_accepted_by_name_or_enum():
    table = BindingTable(enable_button_index={Mode.TWIST: 2, 'horiz': 1})
    assert table.enable_button_index('twist') == 2
    assert table.enable_button_index(Mode.HORIZ) == 1


def test_scale_without_axis_fails_for_enabled_mode():
    with pytest.raises(ConfigurationError):
        BindingTable(
            axis_index={'x': 1},
            scale={('drive', 'yaw'): 0.5},
            enable_button_index={'drive': 0},
        )


def test_scale_without_axis_allowed_for_disabled_mode():
    table = BindingTable(
        axis_index={'x': 1},
        scale={('twist', 'yaw'): 0.5},
        enable_button_index={'drive': 0, 'twist': -1},
    )
    assert table.axis_index('yaw') is None


def test_zero_scale_without_axis_is_allowed():
    BindingTable(scale={('drive', 'z'): 0.0}, enable_button_index={'drive': 0})


def test_unknown_names_rejected():
    with pytest.raises(ConfigurationError):
        BindingTable(axis_index={'w': 0})
    with pytest.raises(ConfigurationError):
        BindingTable(enable_button_index={'turbo': 3})
    with pytest.raises(ConfigurationError):
        BindingTable(scale={('drive', 'w'): 1.0})


def test_unknown_names_rejected_even_when_disabled():
    with pytest.raises(ConfigurationError):
        BindingTable(axis_index={'w': -1})
    with pytest.raises(ConfigurationError):
        BindingTable(enable_button_index={'turbo': -1})
    with pytest.raises(ConfigurationError):
        BindingTable(axis_index={'w': None})


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_from_parameters_applies_normal_scale_to_every_mode():
    table = bindings_from_parameters({
        'enable_button': 0,
        'enable_horiz_button': 5,
        'enable_twist_button': -1,
        'axis_linear.x': 1,
        'axis_angular.yaw': 3,
        'scale_linear.x': 0.5,
        'scale_angular.yaw': 0.8,
        'axis_adjust_front': 7,
        'axis_adjust_back': 6,
        'axis_adjust_steering': 4,
    })
    for mode in Mode:
        assert math.isclose(table.scale(mode, 'x'), 0.5)
        assert math.isclose(table.scale(mode, 'yaw'), 0.8)
    assert table.axis_index('x') == 1
    assert table.axis_index('yaw') == 3
    assert table.axis_index('y') is None
    assert table.enable_button_index(Mode.HORIZ) == 5
    assert table.enable_button_index(Mode.TWIST) is None
    assert table.adjust_front_index() == 7
    assert table.adjust_back_index() == 6
    assert table.steering_delta_index() == 4


def test_from_parameters_missing_entries_are_disabled():
    table = bindings_from_parameters({})
    assert table.axes == {}
    for mode in Mode:
        assert table.enable_button_index(mode) is None
    assert table.steering_delta_index() is None


def test_from_parameters_rejects_scaled_unmapped_channel():
    with pytest.raises(ConfigurationError):
        bindings_from_parameters({
            'enable_button': 0,
            'axis_linear.x': -1,
            'scale_linear.x': 0.5,
        })


def test_bindings_are_read_only():
    source = {'x': 1}
    table = BindingTable(axis_index=source)
    source['x'] = 4
    assert table.axis_index('x') == 1
    with pytest.raises(TypeError):
        table.axes['x'] = 2
