import cv2
import numpy as np

DEFAULT_RADIUS = 0.8
HYSTERESIS_LOW = 127
HYSTERESIS_HIGH = 132


def hysteresis(alpha, low=HYSTERESIS_LOW, high=HYSTERESIS_HIGH):
    """
    Re-binarizes a blurred alpha channel.

    Values below ``low`` drop to 0, values above ``high`` rise to 255 and the
    narrow band in between is ramped linearly onto [0, 255].
    """
    values = alpha.astype(np.float32)
    ramp = np.round((values - low) * (255.0 / (high - low)))
    out = np.where(values < low, 0, np.where(values > high, 255, ramp))
    return np.clip(out, 0, 255).astype(np.uint8)


def blur_alpha(alpha, radius=DEFAULT_RADIUS):
    if radius <= 0:
        return alpha.copy()
    return cv2.GaussianBlur(np.ascontiguousarray(alpha), (0, 0), sigmaX=radius, sigmaY=radius)


def smooth(mask, radius=DEFAULT_RADIUS, low=HYSTERESIS_LOW, high=HYSTERESIS_HIGH):
    """
    Softens the stair-stepped mask edge and snaps it back to a hard edge.
    Returns a new buffer.
    """
    smoothed = mask.copy()
    smoothed[:, :, 3] = hysteresis(blur_alpha(mask[:, :, 3], radius), low, high)
    return smoothed
