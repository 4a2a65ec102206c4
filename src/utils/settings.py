# src/utils/settings.py
"""
Centralized settings and constants for the showcase scene.
"""
import math

# --- General Settings ---
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
FPS = 60
BG_COLOR = (8, 10, 14)
WINDOW_CAPTION = "Showcase"

# Frame delta clamp/smoothing for the host loop
MAX_FRAME_DT = 1 / 15.0
FRAME_DT_WINDOW = 8

# --- Camera Placement (applied once when the rig attaches) ---
CAMERA_RADIUS = 55.0
CAMERA_AZIMUTH = math.radians(80.0)   # theta, around world Y
CAMERA_POLAR = math.pi / 2.1          # phi, measured from world Y
CAMERA_TARGET = (0.0, 17.0, 0.0)
CAMERA_ROLL = 0.0                     # radians around the view axis
CAMERA_FOV_DEG = 50.0

# --- Camera Rig ---
RIG_DAMPING = 2.0             # 1/seconds; higher = snappier
RIG_DEAD_ZONE = 0.15          # fraction of the half-viewport ignored near center
RIG_LOOK_AMPLITUDE_X = 2.0    # world units of look-at sway along camera right
RIG_LOOK_AMPLITUDE_Y = 1.2    # world units of look-at sway along camera up
RIG_POSITION_AMPLITUDE_X = 0.0  # 0 disables positional drift on that axis
RIG_POSITION_AMPLITUDE_Y = 0.0

# --- Hover Lift ---
LIFT_HEIGHT = 0.05
LIFT_RISE_DURATION = 1.5
LIFT_FALL_DURATION = 1.0
LIFT_RISE_EASE = "expo.out"
LIFT_FALL_EASE = "power3.out"

# --- Hero Objects ---
# name -> position, rotation (radians), uniform scale, lifting part local Y, hoverable
HERO_OBJECTS = {
    "wyvern": {"position": (-12.0, 21.0, 0.0), "rotation": (0.015, -0.05, -0.1), "scale": 26.0,
               "lift_part_y": 0.121, "hoverable": True},
    "swan":   {"position": (0.0, 7.0, -40.0), "rotation": (-0.02, -0.75, -0.1), "scale": 20.0,
               "lift_part_y": 0.0, "hoverable": True},
    "shells": {"position": (-2.0, -0.6, 33.0), "rotation": (0.1, 0.6, -0.12), "scale": 14.0,
               "lift_part_y": 0.0, "hoverable": False},
}
HOVER_PICK_RADIUS_PX = 60  # screen-space radius used by the preview hit test

# --- Particle Field ---
PARTICLE_COUNT = 600
PARTICLE_BOX_WIDTH = 70.0
PARTICLE_BOX_DEPTH = 90.0
PARTICLE_BOX_HEIGHT = 40.0
PARTICLE_VERTICAL_BIAS = 6.0
PARTICLE_DRIFT_SPEED = 0.8     # world units per second, +Y
PARTICLE_SEED = None

# --- Preview Colors ---
PARTICLE_COLOR = (210, 220, 255)
HERO_COLOR = (235, 200, 120)
HERO_HOVER_COLOR = (255, 255, 255)
TARGET_COLOR = (255, 90, 90)

# --- Logging ---
LOG_LEVEL = "INFO"
LOG_TO_FILE = False
