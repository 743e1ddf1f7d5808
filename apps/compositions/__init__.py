"""
Chroma-key overlay compositions.

This package holds the composition domain:
- Stage enumeration and exceptions
- Composition configuration
- Transformation pipeline construction
- Cloudinary storage adapter and the composition orchestrator
"""
