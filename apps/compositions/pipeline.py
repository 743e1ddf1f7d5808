# apps/compositions/pipeline.py

"""
Transformation pipeline construction.

Cloudinary applies the steps left to right, so the order defines the
compositing order: base resize, overlay reference, overlay resize,
chroma-key transparency, layer flattening, duration trim.
"""

from typing import Any, Dict, List

from .config import CompositionConfig

TransformationStep = Dict[str, Any]
TransformationPipeline = List[TransformationStep]

OVERLAY_RESOURCE_PREFIX = 'video'


def overlay_reference(public_id: str) -> str:
    """
    Build the overlay layer reference for an uploaded video.

    Layer references use ':' as the folder separator instead of '/'.
    """
    return f"{OVERLAY_RESOURCE_PREFIX}:{public_id.replace('/', ':')}"


def build_overlay_pipeline(
    foreground_public_id: str,
    chroma_key_color: str,
    config: CompositionConfig,
) -> TransformationPipeline:
    if not foreground_public_id:
        raise ValueError("foreground_public_id is required to reference the overlay")

    return [
        {
            'width': config.target_width,
            'crop': 'scale',
        },
        {
            'overlay': overlay_reference(foreground_public_id),
        },
        {
            'flags': 'relative',
            'width': str(float(config.overlay_scale)),
            'crop': 'scale',
        },
        {
            'color': chroma_key_color,
            'effect': f"make_transparent:{config.transparency_tolerance}",
        },
        {
            'flags': 'layer_apply',
            'gravity': config.gravity,
        },
        {
            'duration': str(float(config.output_duration)),
        },
    ]
