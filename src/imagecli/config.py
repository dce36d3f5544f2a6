"""Default configuration, constants, and limits for imagecli."""

# --- Security limits ---
MAX_IMAGE_DIMENSION = 32768  # pixels per side
MAX_IMAGE_PIXELS = 250_000_000

# --- Allowed file extensions ---
IMAGE_EXTENSIONS = frozenset({
    ".png", ".jpg", ".jpeg", ".tiff", ".tif", ".bmp", ".gif", ".webp",
})
RAW_EXTENSIONS = frozenset({
    ".dng", ".cr2", ".cr3", ".nef", ".arw", ".raf", ".orf", ".rw2", ".pef",
})

# --- Luminance (Rec. 709) ---
LUMA_R = 0.2126
LUMA_G = 0.7152
LUMA_B = 0.0722

# --- Tone curve ---
CURVE_XS = (0.0, 25.0, 50.0, 75.0, 100.0)  # fixed abscissas, 0-100 scale
CURVE_SCALE = 100.0
LUT_SIZE = 256

# --- Color balance ---
TEMPERATURE_MAJOR = 0.15  # red/blue response to temperature
TEMPERATURE_MINOR = 0.05  # green response to temperature
TINT_MAJOR = 0.15  # green response to tint
TINT_MINOR = 0.05  # red/blue response to tint

# --- Color grade ---
GRADE_TINT_SCALE = 80.0  # additive shift for a full-saturation band
GRADE_LUM_SCALE = 0.5

# --- Film grain ---
GRAIN_CHANNEL_SEEDS = (42, 137, 251)
GRAIN_CHANNEL_OFFSETS = ((0.0, 0.0), (0.37, 0.71), (-0.53, 0.29))
GRAIN_MONO_SEED = 42
GRAIN_MONO_OFFSET = (0.0, 0.0)
GRAIN_MAX_CELL_GROWTH = 4.0  # cell size spans 1..5 px
GRAIN_SHADOW_EDGES = (0.0, 0.25)
GRAIN_HIGHLIGHT_EDGES = (0.75, 1.0)

# --- Vignette ---
VIGNETTE_MAX_RADIUS = 0.75
VIGNETTE_MAX_FEATHER = 0.5

# --- Structure (local contrast) ---
STRUCTURE_BASELINE = 1080.0
STRUCTURE_SIGMA = 20.0
STRUCTURE_MIN_SIGMA = 4.0

# --- Command defaults ---
DEFAULT_BLUR_SIGMA = 2.0
DEFAULT_UNSHARPEN_SIGMA = 2.0
DEFAULT_UNSHARPEN_THRESHOLD = 5
DEFAULT_VIGNETTE_AMOUNT = -50
DEFAULT_VIGNETTE_MIDPOINT = 50
DEFAULT_VIGNETTE_ROUNDNESS = 0
DEFAULT_VIGNETTE_FEATHER = 50
DEFAULT_GRAIN_AMOUNT = 30
DEFAULT_GRAIN_SIZE = 30
DEFAULT_GRAIN_ROUGHNESS = 50
DEFAULT_OUTPUT_FORMAT = ".png"

# --- Curve plot ---
PLOT_SIZE = 256
PLOT_BACKGROUND = (30, 30, 30)
PLOT_GRID = (60, 60, 60)
PLOT_DIAGONAL = (80, 80, 80)
PLOT_CURVE = (255, 255, 255)
PLOT_POINT = (255, 100, 100)
PLOT_POINT_RADIUS = 3
