def normalize_degree(angle: float) -> float:
    """Normalize degrees into [0, 360)."""
    result = (angle % 360.0 + 360.0) % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if result >= 360.0 else result


def circular_diff(a: float, b: float) -> float:
    """Smallest distance between two angles, in [0, 180]."""
    d = abs(a - b) % 360.0
    return min(d, 360.0 - d)


def signed_circular_diff(target: float, current: float) -> float:
    """Signed difference ``target - current`` folded into [-180, 180)."""
    return normalize_degree(target - current + 180.0) - 180.0


def is_same_angle(a: float, b: float, threshold: float) -> bool:
    return circular_diff(a, b) < threshold
