WIDTH = 1200
HEIGHT = 600
FULLSCREEN = False
FPS = 60
VSYNC = True
BACKGROUND_COLOR = 0x000000
# Multiplier from the driver's timestamp unit to seconds (perf_counter -> 1.0)
TIMESTAMP_SCALE = 1.0

# Camera frustum
CAMERA_FOV = 105
CAMERA_ASPECT = WIDTH / HEIGHT
CAMERA_NEAR = 0.1
CAMERA_FAR = 5
CAMERA_Z = 2
CAMERA_NEAR_FAR_DOMAIN = (0.1, 200.0)
CAMERA_NEAR_FAR_SEPARATION = 0.1

# Fog
FOG_COLOR = 0xADD8E6
FOG_NEAR = 1
FOG_FAR = 2
FOG_DOMAIN = (1.0, 20.0)
FOG_SEPARATION = 0.0

# Directional light
LIGHT_COLOR = 0xFFFFFF
LIGHT_INTENSITY = 2
LIGHT_POSITION = (-1, 2, 4)

# Staggered spin: phase = t * (BASE + index * INCREMENT)
SPIN_BASE_SPEED = 1.0
SPIN_SPEED_INCREMENT = 0.5

# Orbiting spheres with bobbing height and fading shadows
ORBIT_SPHERE_COUNT = 15
ORBIT_SPEED = 0.2
ORBIT_MAX_RADIUS = 10.0
BOB_RATE = 2.0
BOB_RANGE = (-2.0, 2.0)
SHADOW_OPACITY_RANGE = (1.0, 0.25)
SPHERE_RADIUS = 1.0

# Control panel: value change per key press, in units of the control's step
CONTROL_NUDGE_STEPS = 1

# Background texture decoding threads
LOADER_WORKERS = 4
