# Generated artifacts, written relative to the run directory
CT_OUTPUT_FILENAME = "aie_profile.ct"
CT_JSON_FILENAME = "aie_profile_counters.json"

# AIE2 tile address layout
DEFAULT_COLUMN_SHIFT = 25
DEFAULT_ROW_SHIFT = 20

DEFAULT_DEVICE_ID = 0

LOGGER_NAME = "aie_ct_writer"
