# apps/compositions/services/orchestrator.py

"""
Composition Orchestrator.

Composes a chroma-keyed overlay video out of two local files by running a
fixed sequence of stages against the media service:

    UPLOAD_FOREGROUND -> BUILD_PIPELINE -> UPLOAD_BACKGROUND -> CLEANUP_FOREGROUND

Each stage depends on the output of the previous one, so a failure aborts
every stage after it. Failures are returned as an ``Outcome`` rather than
raised.

Known limitation: when UPLOAD_BACKGROUND fails the foreground asset has
already been uploaded and is left in place (an orphan asset). It is only
logged.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, TypeVar

from ..config import CompositionConfig, CompositionRequest
from ..enums import LIST_ASSETS_STAGE, CompositionStage
from ..exceptions import UpstreamError
from ..pipeline import TransformationPipeline, build_overlay_pipeline
from .cloudinary_storage import CloudinaryStorageService, MediaAsset

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class Outcome(Generic[T]):
    """
    Result of an orchestrator operation.

    Exactly one of ``value`` and ``error`` is set. ``stage`` is the last
    stage that ran (the failing one on failure).
    """
    stage: str
    value: Optional[T] = None
    error: Optional[UpstreamError] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status_code(self) -> Optional[int]:
        return self.error.status_code if self.error else None

    @classmethod
    def success(cls, value: T, stage: str, warnings: List[str] = None) -> 'Outcome[T]':
        return cls(stage=stage, value=value, warnings=warnings or [])

    @classmethod
    def failure(cls, error: UpstreamError, stage: str, warnings: List[str] = None) -> 'Outcome[T]':
        return cls(stage=stage, error=error, warnings=warnings or [])


@dataclass
class _CompositionState:
    request: CompositionRequest
    foreground: Optional[MediaAsset] = None
    pipeline: Optional[TransformationPipeline] = None
    background: Optional[MediaAsset] = None
    warnings: List[str] = field(default_factory=list)


class CompositionOrchestrator:
    """
    Runs the overlay composition against a storage collaborator.

    The collaborator must provide ``upload(local_path, folder, transformation)``,
    ``delete(public_ids)`` and ``list_assets()``.
    """

    def __init__(
        self,
        config: Optional[CompositionConfig] = None,
        storage: Any = CloudinaryStorageService,
    ):
        self.config = config
        self.storage = storage

    @classmethod
    def from_settings(cls) -> 'CompositionOrchestrator':
        return cls(CompositionConfig.from_settings())

    @classmethod
    def for_listing(cls) -> 'CompositionOrchestrator':
        """Orchestrator for listing only; the composition settings are not loaded."""
        return cls()

    def list_assets(self) -> Outcome[List[MediaAsset]]:
        try:
            assets = self.storage.list_assets()
        except UpstreamError as e:
            logger.error(f"Listing assets failed: {e}")
            return Outcome.failure(e, stage=LIST_ASSETS_STAGE)

        return Outcome.success(list(assets), stage=LIST_ASSETS_STAGE)

    def compose_overlay(self, request: CompositionRequest) -> Outcome[MediaAsset]:
        if self.config is None:
            raise ValueError("compose_overlay requires a CompositionConfig")

        state = _CompositionState(request=request)
        handlers = {
            CompositionStage.UPLOAD_FOREGROUND: self._upload_foreground,
            CompositionStage.BUILD_PIPELINE: self._build_pipeline,
            CompositionStage.UPLOAD_BACKGROUND: self._upload_background,
            CompositionStage.CLEANUP_FOREGROUND: self._cleanup_foreground,
        }

        for stage in CompositionStage:
            try:
                handlers[stage](state)
            except UpstreamError as e:
                if (
                    stage == CompositionStage.CLEANUP_FOREGROUND
                    and not self.config.cleanup_failure_is_fatal
                ):
                    warning = (
                        f"Foreground asset '{state.foreground.public_id}' "
                        f"could not be deleted: {e.reason}"
                    )
                    logger.warning(warning)
                    state.warnings.append(warning)
                    continue

                if stage == CompositionStage.UPLOAD_BACKGROUND:
                    logger.warning(
                        f"Background upload failed, foreground asset "
                        f"'{state.foreground.public_id}' is left orphaned"
                    )
                logger.error(f"Composition failed at stage {stage.value}: {e}")
                return Outcome.failure(e, stage=stage.value, warnings=state.warnings)

        logger.info(f"Composed overlay video {state.background.public_id}")
        return Outcome.success(
            state.background,
            stage=CompositionStage.CLEANUP_FOREGROUND.value,
            warnings=state.warnings,
        )

    def _upload_foreground(self, state: _CompositionState) -> None:
        state.foreground = self.storage.upload(state.request.foreground_path, folder=False)
        logger.debug(f"Uploaded foreground as {state.foreground.public_id}")

    def _build_pipeline(self, state: _CompositionState) -> None:
        state.pipeline = build_overlay_pipeline(
            state.foreground.public_id,
            state.request.chroma_key_color,
            self.config,
        )

    def _upload_background(self, state: _CompositionState) -> None:
        state.background = self.storage.upload(
            state.request.background_path,
            folder=True,
            transformation=state.pipeline,
        )

    def _cleanup_foreground(self, state: _CompositionState) -> None:
        self.storage.delete([state.foreground.public_id])
