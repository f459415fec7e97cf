"""Configuration module for fileark."""

from dataclasses import dataclass, field


@dataclass
class ScannerConfig:
    max_path_length: int = 4096


@dataclass
class CopierConfig:
    progress_batch_size: int = 5
    manifest_name: str = "_manifest.json"
    sidecar_suffix: str = ".origin.txt"


@dataclass
class Config:
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    copier: CopierConfig = field(default_factory=CopierConfig)
