import pytest

pytest.importorskip('rclpy')
pytest.importorskip('geometry_msgs.msg')
pytest.importorskip('sensor_msgs.msg')
pytest.importorskip('std_msgs.msg')

from freight_lite_teleop import ConfigurationError, Velocity  # noqa: E402
from freight_lite_teleop import teleop_joy_node  # noqa: E402


def test_main_shuts_down_when_bindings_are_invalid(monkeypatch):
    calls = []

    def failing_node():
        raise ConfigurationError("no axis for 'yaw'")

    monkeypatch.setattr(teleop_joy_node.rclpy, 'init', lambda args=None: calls.append('init'))
    monkeypatch.setattr(teleop_joy_node.rclpy, 'shutdown', lambda: calls.append('shutdown'))
    monkeypatch.setattr(teleop_joy_node, 'TeleopJoyNode', failing_node)

    with pytest.raises(ConfigurationError):
        teleop_joy_node.main()

    assert calls == ['init', 'shutdown']


def test_velocity_to_twist_maps_roll_pitch_yaw():
    twist = teleop_joy_node.velocity_to_twist(
        Velocity(linear_x=0.1, linear_y=0.2, linear_z=0.3, angular_x=0.4, angular_y=0.5, angular_z=0.6)
    )
    assert (twist.linear.x, twist.linear.y, twist.linear.z) == (0.1, 0.2, 0.3)
    assert (twist.angular.x, twist.angular.y, twist.angular.z) == (0.4, 0.5, 0.6)
