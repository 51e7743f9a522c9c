"""Monte Carlo option simulation (GBM)."""
from .config import OptionType, SimulationConfig
from .engine import SimulationResult, box_muller, paths_frame, run_simulation
