#!/usr/bin/env python3
"""
Example 02: Mecanum Drive Kinematics

Demonstrates:
- Field-relative driver commands
- Chassis speeds -> wheel speeds
- Desaturating wheel speeds to the motor limit
- Odometry-style wheel speeds -> chassis speeds

Usage:
    python 02_mecanum_drive.py
    python 02_mecanum_drive.py 45    # robot heading in degrees
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from robot_math.geometry import Rotation2d, Translation2d
from robot_math.kinematics import ChassisSpeeds, MecanumDriveKinematics

MAX_WHEEL_SPEED = 3.0  # m/s


def main():
    heading = float(sys.argv[1]) if len(sys.argv) > 1 else 30.0

    kinematics = MecanumDriveKinematics(
        Translation2d(0.3, 0.25),
        Translation2d(0.3, -0.25),
        Translation2d(-0.3, 0.25),
        Translation2d(-0.3, -0.25),
    )

    print("=" * 60)
    print("Mecanum Drive Example")
    print("=" * 60)

    command = ChassisSpeeds.from_field_relative_speeds(
        2.0, 1.0, 1.5, Rotation2d.from_degrees(heading)
    )
    print(f"Robot-relative command: {command}")

    wheels = kinematics.to_wheel_speeds(command)
    limited = wheels.normalize(MAX_WHEEL_SPEED)
    print(f"Wheel speeds:      {wheels}")
    print(f"Normalized (<= {MAX_WHEEL_SPEED}): {limited}")

    achieved = kinematics.to_chassis_speeds(limited)
    print(f"Achieved chassis:  {achieved}")

    pivot = kinematics.to_wheel_speeds(ChassisSpeeds(0, 0, 1.0), Translation2d(0.3, 0.25))
    print(f"Pivot about FL:    {pivot}")


if __name__ == "__main__":
    main()
