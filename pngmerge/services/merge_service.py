"""Полный цикл: сбор изображений → склейка → сохранение PNG."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from pngmerge.config import default_output_dir
from pngmerge.models.atlas_model import Atlas, AtlasConfig, SourceImage
from pngmerge.services.compose_service import ComposeService
from pngmerge.services.output_service import OutputService
from pngmerge.services.source_service import SourceService

logger = logging.getLogger(__name__)

SourceLike = Union[str, Path, SourceImage]


@dataclass(frozen=True)
class MergeResult:
    path: Path
    atlas: Atlas


@dataclass
class MergeService:
    """Оркестрирует сервисы; сам изображения не обрабатывает.

    Ошибки (`EmptyInputError`, `DirectoryCreateError`, `EncodeError`,
    ошибки загрузки) пробрасываются вызывающему коду.
    """
    source_service: SourceService = field(default_factory=SourceService)
    compose_service: ComposeService = field(default_factory=ComposeService)
    output_service: OutputService = field(default_factory=OutputService)

    def run(
        self,
        sources: Iterable[SourceLike],
        config: AtlasConfig = AtlasConfig(),
        output_dir: Optional[Union[str, Path]] = None,
    ) -> MergeResult:
        images = self._resolve(list(sources))
        atlas = self.compose_service.compose(images, config)
        logger.info("cell size: %dx%d, atlas: %dx%d", atlas.cell_width, atlas.cell_height, *atlas.size)

        directory = Path(output_dir) if output_dir is not None else default_output_dir()
        path = self.output_service.save(atlas.image, directory)
        return MergeResult(path=path, atlas=atlas)

    def _resolve(self, sources: Sequence[SourceLike]) -> list[SourceImage]:
        # ready images keep their place, paths are loaded in between
        images: list[SourceImage] = []
        pending: list[Union[str, Path]] = []
        for item in sources:
            if isinstance(item, SourceImage):
                images.extend(self.source_service.collect(pending))
                pending = []
                images.append(item)
            else:
                pending.append(item)
        images.extend(self.source_service.collect(pending))
        return images
