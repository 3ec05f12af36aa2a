#!/usr/bin/env python3
"""Joystick teleoperation node for the Freight Lite base.

This module implements a ROS 2 node that:
1. Listens to raw joystick input from the 'joy' package
2. Picks the active mode (drive / horiz / twist) or a steering nudge
3. Publishes velocity targets on cmd_vel and steering adjustments on
   adjust_steering

All decisions are made by InputTranslator; this node only converts between
ROS messages and the translator's commands.
"""
from __future__ import annotations

from typing import Any, Dict, Sequence

import rclpy
from rclpy.node import Node
from rclpy.qos import DurabilityPolicy, QoSProfile
from geometry_msgs.msg import Twist
from sensor_msgs.msg import Joy
from std_msgs.msg import Int16

from freight_lite_teleop.bindings import (
    ANGULAR_CHANNELS,
    ENABLE_BUTTON_PARAMS,
    LINEAR_CHANNELS,
    ConfigurationError,
    Mode,
    bindings_from_parameters,
)
from freight_lite_teleop.commands import SteeringAdjust, Velocity
from freight_lite_teleop.translator import InputSnapshot, InputTranslator

# Defaults are the Freight Lite teleop defaults: hold button 0 to drive,
# left stick up/down for linear x, left stick left/right for yaw.
# Horiz/twist modes and steering nudges stay off until they are configured.
BINDING_DEFAULTS: Dict[str, Any] = {
    'enable_button': 0,
    'enable_horiz_button': -1,
    'enable_twist_button': -1,
    'axis_adjust_front': -1,
    'axis_adjust_back': -1,
    'axis_adjust_steering': -1,
    'axis_linear.x': 1,
    'axis_linear.y': -1,
    'axis_linear.z': -1,
    'axis_angular.yaw': 0,
    'axis_angular.pitch': -1,
    'axis_angular.roll': -1,
    'scale_linear.x': 0.5,
    'scale_linear.y': 0.0,
    'scale_linear.z': 0.0,
    'scale_angular.yaw': 0.5,
    'scale_angular.pitch': 0.0,
    'scale_angular.roll': 0.0,
}


def velocity_to_twist(velocity: Velocity) -> Twist:
    """Convert a translator Velocity into a geometry_msgs Twist.

    Roll/pitch/yaw land on angular x/y/z, the usual ROS convention.
    """
    msg = Twist()
    msg.linear.x = float(velocity.linear_x)
    msg.linear.y = float(velocity.linear_y)
    msg.linear.z = float(velocity.linear_z)
    msg.angular.x = float(velocity.angular_x)
    msg.angular.y = float(velocity.angular_y)
    msg.angular.z = float(velocity.angular_z)
    return msg


class TeleopJoyNode(Node):
    """ROS 2 node that drives the base from a joystick.

    This node:
    - Subscribes to Joy messages from the joy driver
    - Feeds each message to an InputTranslator, in arrival order
    - Publishes Twist on cmd_vel and Int16 wheel codes on adjust_steering
    """

    def __init__(self) -> None:
        """Initialize the node.

        The __init__ method runs once when the node starts. It:
        1. Declares parameters (topics, bindings, logging) with defaults
        2. Builds the BindingTable from those parameters
        3. Creates the InputTranslator that owns the mode state
        4. Creates the cmd_vel and adjust_steering publishers
        5. Creates the Joy subscription
        6. Logs the bindings so a miswired controller is easy to spot

        Raises:
            ConfigurationError: if the parameters describe unusable bindings
        """
        # Call the parent Node class constructor, giving this node a name
        super().__init__('freight_lite_teleop_joy')

        # Topic where the joy driver publishes raw controller state
        self.declare_parameter('joy_topic', 'joy')

        # Topics where velocity targets and steering adjustments go
        self.declare_parameter('cmd_vel_topic', 'cmd_vel')
        self.declare_parameter('adjust_steering_topic', 'adjust_steering')

        # Queue depth for the publishers and the subscription
        self.declare_parameter('queue_size', 1)

        # Axis / button bindings and scales, one parameter each
        # (axis_linear.x, scale_angular.yaw, ...)
        for name, default in BINDING_DEFAULTS.items():
            self.declare_parameter(name, default)

        # Log throttling: joy publishes at the autorepeat rate, so per-message
        # logs are limited to one every log_throttle_sec seconds
        self.declare_parameter('log_throttle_sec', 0.5)

        # Enable/disable info logging
        self.declare_parameter('verbose', True)

        # Retrieve the parameter values from the parameter server
        self._joy_topic = self.get_parameter('joy_topic').value
        self._cmd_vel_topic = self.get_parameter('cmd_vel_topic').value
        self._adjust_steering_topic = self.get_parameter('adjust_steering_topic').value
        queue_size = int(self.get_parameter('queue_size').value)

        # Store log throttle time, ensuring it's not negative
        self._log_throttle_sec = max(float(self.get_parameter('log_throttle_sec').value), 0.0)
        self.verbose = self.get_parameter('verbose').value

        # Resolve the bindings once; a bad configuration stops the node here
        params = {name: self.get_parameter(name).value for name in BINDING_DEFAULTS}
        try:
            self._bindings = bindings_from_parameters(params)
        except ConfigurationError as exc:
            self.get_logger().fatal(f"Invalid joystick bindings: {exc}")
            raise

        # The translator holds the active mode and the "stop already sent" flag
        self._translator = InputTranslator(self._bindings)

        # Latched (transient local), so late subscribers still see the last command
        qos = QoSProfile(depth=queue_size, durability=DurabilityPolicy.TRANSIENT_LOCAL)

        # cmd_vel carries complete velocity targets, never deltas
        self._cmd_vel_publisher = self.create_publisher(Twist, self._cmd_vel_topic, qos)

        # adjust_steering carries one-shot signed wheel codes
        self._adjust_steering_publisher = self.create_publisher(
            Int16,
            self._adjust_steering_topic,
            qos,
        )

        # When a Joy message arrives, self._joy_callback is called
        self._subscription = self.create_subscription(
            Joy,
            self._joy_topic,
            self._joy_callback,
            queue_size,
        )

        self._log_bindings()

    def _log_bindings(self) -> None:
        """Log enable buttons, mapped axes and scales at startup."""
        logger = self.get_logger()
        for mode in Mode:
            index = self._bindings.enable_button_index(mode)
            logger.info(
                f"{mode.name.capitalize()} enable button "
                f"{index if index is not None else 'disabled'} "
                f"({ENABLE_BUTTON_PARAMS[mode]})."
            )

        # All modes share the same scale set, so DRIVE's scales are representative
        for kind, channels in (('Linear', LINEAR_CHANNELS), ('Angular', ANGULAR_CHANNELS)):
            for channel in channels:
                index = self._bindings.axis_index(channel)
                if index is None:
                    continue
                logger.info(
                    f"{kind} axis {channel} on {index} at scale "
                    f"{self._bindings.scale(Mode.DRIVE, channel):f}."
                )

        logger.info(
            f"Steering adjust axes: front={self._bindings.adjust_front_index()}, "
            f"back={self._bindings.adjust_back_index()}, "
            f"delta={self._bindings.steering_delta_index()}"
        )

    def _joy_callback(self, msg: Joy) -> None:
        """Handle incoming joystick messages.

        This method is called automatically by ROS 2 every time a message
        arrives on the joy topic. It:
        1. Copies the Joy arrays into an InputSnapshot
        2. Lets the translator pick the mode and produce commands
        3. Publishes every command, in the order the translator returned them
        4. Logs what was sent (throttled to avoid spam)

        Args:
            msg (Joy): The incoming message from the joy driver
        """
        # Snapshot the message so the translator never sees a mutating array
        snapshot = InputSnapshot.from_joy(msg.axes, msg.buttons)

        # Zero, one or several commands; order matters (stop before drive)
        commands = self._translator.evaluate(snapshot)

        for command in commands:
            if isinstance(command, SteeringAdjust):
                # Signed wheel code: magnitude selects the wheel, sign the direction
                adjust_msg = Int16()
                adjust_msg.data = command.code
                self._adjust_steering_publisher.publish(adjust_msg)
            else:
                self._cmd_vel_publisher.publish(velocity_to_twist(command))

        # Only log when something was actually published
        if self.verbose and commands:
            mode = self._translator.state.active_mode
            self.get_logger().info(
                f"[{mode.name if mode else 'IDLE'}] -> "
                + ', '.join(str(command) for command in commands),
                throttle_duration_sec=self._log_throttle_sec,
            )

    def destroy_node(self) -> bool:
        """Clean up resources when the node shuts down.

        Returns:
            bool: True if cleanup was successful
        """
        # Stop listening to the joy topic first, so no command is published
        # while the publishers are being torn down
        if getattr(self, '_subscription', None) is not None:
            self.destroy_subscription(self._subscription)
            self._subscription = None

        if getattr(self, '_cmd_vel_publisher', None) is not None:
            self.destroy_publisher(self._cmd_vel_publisher)
            self._cmd_vel_publisher = None

        if getattr(self, '_adjust_steering_publisher', None) is not None:
            self.destroy_publisher(self._adjust_steering_publisher)
            self._adjust_steering_publisher = None

        # Call the parent class cleanup
        return super().destroy_node()


def main(args: Sequence[str] | None = None) -> None:
    """Entry point for the node when run as a standalone executable.

    This function is called when you run:
        ros2 run freight_lite_teleop teleop_joy_node

    It:
    1. Initializes ROS 2 (rclpy.init)
    2. Creates an instance of our node
    3. Spins the node until Ctrl+C
    4. Destroys the node (if it was created) and shuts ROS 2 down, even when
       the node could not be built because of bad bindings

    Args:
        args: Command-line arguments passed to ROS 2 (usually None)
    """
    # Initialize ROS 2, once per process
    rclpy.init(args=args)

    node = None
    try:
        # A ConfigurationError raised here still reaches rclpy.shutdown()
        node = TeleopJoyNode()

        # Run callbacks until interrupted
        rclpy.spin(node)
    except KeyboardInterrupt:
        if node is not None:
            node.get_logger().info("Keyboard interrupt, shutting down...")
    finally:
        if node is not None:
            node.destroy_node()

        # Shut down ROS 2
        rclpy.shutdown()


__all__ = ['TeleopJoyNode', 'velocity_to_twist']


if __name__ == '__main__':
    main()
