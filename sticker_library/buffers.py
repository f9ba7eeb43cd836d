import cv2
import numpy as np


def new_buffer(size):
    """
    Allocates a transparent square RGBA buffer.
    """
    if size <= 0:
        raise ValueError(f"Canvas size must be positive, got {size}")
    return np.zeros((size, size, 4), dtype=np.uint8)


def check_buffer(buffer, size):
    if buffer.shape != (size, size, 4):
        raise ValueError(f"Expected a {size}x{size} RGBA buffer, got shape {buffer.shape}")


def alpha_plane(buffer):
    """Alpha channel as float32 in [0, 1]."""
    return buffer[:, :, 3].astype(np.float32) / 255.0


def to_uint8(plane):
    return np.clip(np.round(plane * 255.0), 0, 255).astype(np.uint8)


def shift_plane(plane, dx, dy):
    """
    Translates a single-channel float plane by a sub-pixel offset.

    Samples that fall outside the plane read as zero.
    """
    h, w = plane.shape[:2]
    matrix = np.float32([[1, 0, dx], [0, 1, dy]])
    return cv2.warpAffine(
        plane,
        matrix,
        (w, h),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=0,
    )


def over(dst_alpha, src_alpha):
    """Source-over on bare alpha planes."""
    return src_alpha + dst_alpha * (1.0 - src_alpha)


def composite_over(dst, src):
    """
    Alpha-composites straight-alpha RGBA ``src`` over ``dst`` in place.
    """
    src_a = alpha_plane(src)[:, :, None]
    dst_a = alpha_plane(dst)[:, :, None]
    out_a = src_a + dst_a * (1.0 - src_a)

    src_rgb = src[:, :, :3].astype(np.float32)
    dst_rgb = dst[:, :, :3].astype(np.float32)
    weighted = src_rgb * src_a + dst_rgb * dst_a * (1.0 - src_a)
    out_rgb = np.divide(weighted, out_a, out=np.zeros_like(weighted), where=out_a > 0)

    dst[:, :, :3] = np.clip(np.round(out_rgb), 0, 255).astype(np.uint8)
    dst[:, :, 3] = to_uint8(out_a[:, :, 0])
    return dst


def fill_with_mask(size, rgb, mask_alpha):
    """
    Solid ``rgb`` layer whose alpha is taken from ``mask_alpha`` (uint8).
    """
    layer = new_buffer(size)
    layer[:, :, :3] = rgb
    layer[:, :, 3] = mask_alpha
    return layer


def warp_rgba(tile, matrix, size):
    """
    Affine-warps an RGBA tile onto a ``size`` x ``size`` layer.

    Interpolation runs on premultiplied colour so transparent texels do not
    bleed dark fringes into the edges.
    """
    rgba = tile.astype(np.float32)
    alpha = rgba[:, :, 3:4] / 255.0
    rgba[:, :, :3] *= alpha

    warped = cv2.warpAffine(
        rgba,
        np.float32(matrix),
        (size, size),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=(0, 0, 0, 0),
    )
    out_alpha = warped[:, :, 3:4] / 255.0
    rgb = np.divide(
        warped[:, :, :3], out_alpha, out=np.zeros_like(warped[:, :, :3]), where=out_alpha > 0
    )
    layer = np.empty((size, size, 4), dtype=np.uint8)
    layer[:, :, :3] = np.clip(np.round(rgb), 0, 255).astype(np.uint8)
    layer[:, :, 3] = np.clip(np.round(warped[:, :, 3]), 0, 255).astype(np.uint8)
    return layer
