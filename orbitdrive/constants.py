"""Physical and gameplay constants shared by the simulation."""

import math

G = 100.0
PI = math.pi

BASE_RADIUS_FACTOR = 100.0
REFERENCE_MASS = 10000.0

MAIN_PLANET_MASS = 100000.0
ORBIT_PERIOD = 420.0

SECONDARY_PLANET_MASS = MAIN_PLANET_MASS * 0.06

MAIN_PLANET_RADIUS = 10000.0
MASS_RATIO = 0.06
CUBE_ROOT_APPROX = 60.0
SECONDARY_PLANET_RADIUS = (MAIN_PLANET_RADIUS / CUBE_ROOT_APPROX) / 10000

MAIN_PLANET_X = 400.0
MAIN_PLANET_Y = 300.0

PLANET_ORBIT_DISTANCE = (
    (G * MAIN_PLANET_MASS * ORBIT_PERIOD * ORBIT_PERIOD) / (4.0 * PI * PI)
) ** (1.0 / 3.0)

SECONDARY_PLANET_X = MAIN_PLANET_X + PLANET_ORBIT_DISTANCE
SECONDARY_PLANET_Y = MAIN_PLANET_Y

SECONDARY_PLANET_ORBITAL_VELOCITY = math.sqrt(G * MAIN_PLANET_MASS / PLANET_ORBIT_DISTANCE)

ROCKET_MASS = 1.0
ROCKET_SIZE = 15.0

GRAVITY_VECTOR_SCALE = 100.0
VELOCITY_VECTOR_SCALE = 0.01

TRAJECTORY_TIME_STEP = 0.05
TRAJECTORY_STEPS = 5000
TRAJECTORY_COLLISION_RADIUS = 10.0

FRICTION = 0.0098
TRANSFORM_DISTANCE = 30.0
ADAPTIVE_TIMESTEP_THRESHOLD = 10.0
CAR_WHEEL_RADIUS = 5.0
CAR_BODY_WIDTH = 30.0
CAR_BODY_HEIGHT = 15.0

BASE_THRUST_MULTIPLIER = 1.0
ENGINE_THRUST_POWER = G * BASE_THRUST_MULTIPLIER

TRANSFORM_VELOCITY_FACTOR = 0.1