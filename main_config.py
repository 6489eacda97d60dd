# --- Reproducibility ---
# the split seed is passed explicitly, nothing seeds numpy's global state
RANDOM_STATE = 101
TEST_SPLIT = 0.3

# --- Evaluation ---
DEF_THRESHOLD = 0.5
