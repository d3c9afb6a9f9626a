# examples/__init__.py
"""
Examples demonstrating robot_math.

Examples:
    01_lqr_design.py          - Discretize a drivetrain model and design LQR
    02_mecanum_drive.py       - Mecanum wheel speeds, normalization, odometry
    03_trajectory_files.py    - Load, sample and export PathWeaver trajectories

Run examples:
    cd examples
    python 01_lqr_design.py

Prerequisites:
    - robot_math installed (pip install -e .)
"""
