ASSETS_PATH: str = "./assets/"
IMAGES_PATH: str = ASSETS_PATH + "img/"

# Dice faces, one texture per box side (+x, -x, +y, -y, +z, -z)
FLOWER1_TEXTURE_PATH: str = IMAGES_PATH + "flower-1.jpg"
FLOWER2_TEXTURE_PATH: str = IMAGES_PATH + "flower-2.jpg"
FLOWER3_TEXTURE_PATH: str = IMAGES_PATH + "flower-3.jpg"
FLOWER4_TEXTURE_PATH: str = IMAGES_PATH + "flower-4.jpg"
FLOWER5_TEXTURE_PATH: str = IMAGES_PATH + "flower-5.jpg"
FLOWER6_TEXTURE_PATH: str = IMAGES_PATH + "flower-6.jpg"

DICE_FACE_TEXTURE_PATHS: tuple = (
    FLOWER1_TEXTURE_PATH,
    FLOWER2_TEXTURE_PATH,
    FLOWER3_TEXTURE_PATH,
    FLOWER4_TEXTURE_PATH,
    FLOWER5_TEXTURE_PATH,
    FLOWER6_TEXTURE_PATH,
)

# Textures built in code instead of read from disk (see texture_utils)
GENERATED_PREFIX: str = "generated:"
ROUND_SHADOW_ID: str = GENERATED_PREFIX + "round-shadow"
CHECKER_ID: str = GENERATED_PREFIX + "checker"
