"""

This launch file starts:
0. game_controller_node - Publishes raw joystick data from hardware device
1. teleop_joy_node - Turns joystick input into cmd_vel and adjust_steering
"""
from launch import LaunchDescription
from launch_ros.actions import Node


def generate_launch_description():
    """Generate launch description with the joystick driver and teleop node."""

    # game_controller_node - reads from joystick hardware
    game_controller_node = Node(
        package='joy',
        executable='game_controller_node',
        name='game_controller_node',
        output='screen',
        parameters=[{
            'device_id': 0,  # Usually 0 for /dev/input/js0
            'deadzone': 0.05,
            'autorepeat_rate': 20.0,  # Hz
        }]
    )

    # Teleop node - mode arbitration and steering adjustments
    teleop_node = Node(
        package='freight_lite_teleop',
        executable='teleop_joy_node',
        name='freight_lite_teleop_joy',
        output='screen',
        parameters=[{
            'joy_topic': 'joy',
            'cmd_vel_topic': 'cmd_vel',
            'adjust_steering_topic': 'adjust_steering',
            # Enable buttons, hold one to drive in that wheel layout
            'enable_button': 4,          # LB: straight drive
            'enable_horiz_button': 5,    # RB: crab sideways
            'enable_twist_button': 0,    # A: spin in place
            # Steering nudges on the D-pad, confirmed with the right stick
            'axis_adjust_front': 7,      # D-pad up/down
            'axis_adjust_back': 6,       # D-pad left/right
            'axis_adjust_steering': 4,   # Right stick up/down
            'axis_linear.x': 1,
            'axis_linear.y': 0,
            'axis_angular.yaw': 3,
            'scale_linear.x': 0.5,
            'scale_linear.y': 0.5,
            'scale_angular.yaw': 0.8,
            'log_throttle_sec': 0.5,
            'verbose': False,  # Logging disabled
        }]
    )

    return LaunchDescription([
        game_controller_node,
        teleop_node,
    ])
