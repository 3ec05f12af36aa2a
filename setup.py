import os
from glob import glob

from setuptools import find_packages, setup

package_name = 'freight_lite_teleop'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test']),
    data_files=[
        ('share/ament_index/resource_index/packages',
            ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        (os.path.join('share', package_name, 'launch'), glob('launch/*.launch.py')),
    ],
    install_requires=[
        'setuptools',
    ],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='freight_lite',
    maintainer_email='freight_lite@todo.todo',
    description='Joystick teleoperation for the Freight Lite four-wheel-steering base',
    license='BSD',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'teleop_joy_node = freight_lite_teleop.teleop_joy_node:main',
        ],
    },
)
