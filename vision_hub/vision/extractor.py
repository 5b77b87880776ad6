def get_center_distance(raw_depth, width, height) -> float:
    """
    Read the depth at the image center straight from the Z16 buffer.

    Returns:
        float: distance in meters, 0.0 when there is no reading
    """
    if not raw_depth:
        return 0.0

    cx, cy = width // 2, height // 2
    offset = (cy * width + cx) * 2

    if offset < 0 or offset + 1 >= len(raw_depth):
        return 0.0

    # Z16 is little-endian, low byte first
    raw_z = raw_depth[offset] | (raw_depth[offset + 1] << 8)
    return raw_z / 1000.0
