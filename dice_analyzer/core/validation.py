ROLL_MIN = 6
ROLL_MAX = 54

def is_valid_roll(r: int) -> bool:
    return isinstance(r, int) and not isinstance(r, bool) and ROLL_MIN <= r <= ROLL_MAX
