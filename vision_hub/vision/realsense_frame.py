import pyrealsense2 as rs


def realsense_init(width = 640, height = 480, fps = 30, bag_file = None):
    """
    Initialize RealSense pipeline with params

    Args:
        width (int): Frame width
        height (int): Frame height
        fps (int): (Max) Frame rate
        bag_file (str): Play a recorded .bag file instead of a live device
    Returns:
        pipeline: Started RealSense pipeline
        align: Depth-to-color alignment block
        profile: Active pipeline profile
    """

    pipeline = rs.pipeline()
    config = rs.config()

    if bag_file is not None:
        rs.config.enable_device_from_file(config, bag_file, repeat_playback=False)

    # Color, raw RGB so the hub does the conversion itself
    config.enable_stream(rs.stream.color, width, height, rs.format.rgb8, fps)

    # Depth
    config.enable_stream(rs.stream.depth, width, height, rs.format.z16, fps)

    profile = pipeline.start(config)

    if bag_file is not None:
        # Deliver every recorded frame instead of dropping to keep wall-clock pace
        profile.get_device().as_playback().set_real_time(False)

    align = rs.align(rs.stream.color)

    return pipeline, align, profile


def realsense_get_frame(pipeline, align, timeout_ms = 1000):
    """
    Get an aligned frameset from a started pipeline

    Args:
        pipeline (rs.pipeline) : started pipeline
        align (rs.align) : alignment block targeting the color stream
        timeout_ms (int) : maximum blocking time

    Returns:
        (frameset, color_frame, depth_frame), or None when nothing arrived in time
        or one of the streams is missing
    """

    success, frames = pipeline.try_wait_for_frames(timeout_ms)
    if not success:
        return None

    aligned_frames = align.process(frames)
    depth_frame = aligned_frames.get_depth_frame()
    color_frame = aligned_frames.get_color_frame()

    if not color_frame or not depth_frame:
        return None

    return aligned_frames, color_frame, depth_frame
