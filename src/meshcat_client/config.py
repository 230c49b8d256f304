"""
Configuration management for the meshcat client.
Loads from YAML and provides type-safe access to settings.
"""

from dataclasses import dataclass, field
from pathlib import Path
import yaml

from meshcat_client.constants import DemoConstants, TransportConstants


def get_project_root() -> Path:
    """
    Find the project root directory by locating pyproject.toml.

    Returns:
        Path to project root directory
    """
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent

    # Fallback: src/meshcat_client/config.py -> project root
    return Path(__file__).resolve().parent.parent.parent


# Default config path at project root
DEFAULT_CONFIG_PATH = get_project_root() / "config.yaml"


@dataclass
class MeshcatConfig:
    """Connection to meshcat-server."""
    endpoint: str = TransportConstants.DEFAULT_ENDPOINT
    timeout_ms: int = TransportConstants.DEFAULT_TIMEOUT_MS
    retries: int = TransportConstants.DEFAULT_RETRIES
    linger_ms: int = TransportConstants.DEFAULT_LINGER_MS
    verbose: bool = False


@dataclass
class DemoConfig:
    """Animation settings for the command line demos."""
    frames: int = DemoConstants.DEFAULT_FRAMES
    frame_delay: float = DemoConstants.DEFAULT_FRAME_DELAY


@dataclass
class Config:
    """
    Master configuration container.

    Aggregates all subsystem configurations.
    """
    meshcat: MeshcatConfig = field(default_factory=MeshcatConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)


class ConfigManager:
    """
    Configuration manager with YAML loading.

    Usage:
        # Load from project root config.yaml (default)
        config = ConfigManager.load()

        # Load from specific path
        config = ConfigManager.load('path/to/config.yaml')

        # Use built-in defaults only
        config = ConfigManager.load('default')

        endpoint = config.meshcat.endpoint
    """

    @staticmethod
    def load(config_path: str | Path | None = None) -> Config:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file.
                        If None, tries to load from project root config.yaml.
                        If "default", uses built-in defaults without loading file.

        Returns:
            Config object with loaded settings

        Raises:
            yaml.YAMLError: If the file is not valid YAML
            ValueError: If a section is not a mapping
        """
        if config_path == "default":
            return Config()

        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        path = Path(config_path)
        if not path.exists():
            print(f"Warning: Config file {config_path} not found. Using defaults.")
            return Config()

        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        if data is None:
            return Config()
        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

        # Parse meshcat connection config
        meshcat_cfg = MeshcatConfig()
        if 'meshcat' in data:
            mc_data = ConfigManager._section(data, 'meshcat')
            meshcat_cfg = MeshcatConfig(
                endpoint=str(mc_data.get('endpoint', meshcat_cfg.endpoint)),
                timeout_ms=int(mc_data.get('timeout_ms', meshcat_cfg.timeout_ms)),
                retries=int(mc_data.get('retries', meshcat_cfg.retries)),
                linger_ms=int(mc_data.get('linger_ms', meshcat_cfg.linger_ms)),
                verbose=bool(mc_data.get('verbose', meshcat_cfg.verbose)),
            )

        # Parse demo config
        demo_cfg = DemoConfig()
        if 'demo' in data:
            demo_data = ConfigManager._section(data, 'demo')
            demo_cfg = DemoConfig(
                frames=int(demo_data.get('frames', demo_cfg.frames)),
                frame_delay=float(demo_data.get('frame_delay', demo_cfg.frame_delay)),
            )

        return Config(meshcat=meshcat_cfg, demo=demo_cfg)

    @staticmethod
    def _section(data: dict, name: str) -> dict:
        section = data[name]
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError(f"Config section '{name}' must be a mapping")
        return section

    @staticmethod
    def save(config: Config, config_path: str | Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Config object to save
            config_path: Path to save YAML file
        """
        data = {
            'meshcat': {
                'endpoint': config.meshcat.endpoint,
                'timeout_ms': config.meshcat.timeout_ms,
                'retries': config.meshcat.retries,
                'linger_ms': config.meshcat.linger_ms,
                'verbose': config.meshcat.verbose,
            },
            'demo': {
                'frames': config.demo.frames,
                'frame_delay': config.demo.frame_delay,
            },
        }

        with open(config_path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False, indent=2)
