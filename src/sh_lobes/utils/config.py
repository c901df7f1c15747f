"""Configuration management for lobe sampling and rendering."""

from dataclasses import dataclass
from pathlib import Path

from ..harmonics.spherical_harmonics import N_SH_COEFFS


@dataclass
class LobeConfig:
    """Configuration for sampling and laying out the SH lobes.

    Attributes:
        n_theta: Samples along each meridian, theta in [0, pi] inclusive
        n_phi: Number of meridians, phi in [0, 2*pi)
        spacing: Distance between neighbouring lobes of a band, and between bands
        top_height: Height (z) of the band 0 lobe
        output_dir: Directory for rendered images
    """

    n_theta: int = 100
    n_phi: int = 100
    spacing: float = 1.5
    top_height: float = 3.0
    output_dir: Path = Path("renders")

    def __post_init__(self):
        """Validate configuration."""
        if self.n_theta < 2:
            raise ValueError(f"n_theta must be at least 2, got {self.n_theta}")

        if self.n_phi < 1:
            raise ValueError(f"n_phi must be at least 1, got {self.n_phi}")

        if not self.spacing > 0:
            raise ValueError(f"spacing must be positive, got {self.spacing}")

        # Ensure output directory exists
        self.output_dir = Path(self.output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def num_lobes(self) -> int:
        """Number of lobes drawn (one per basis function)."""
        return N_SH_COEFFS

    @property
    def samples_per_lobe(self) -> int:
        return self.n_theta * self.n_phi

    def get_image_path(self, name: str = "sh_lobes") -> Path:
        """Get path of a rendered image inside the output directory."""
        return self.output_dir / f"{name}.png"
