from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Density curves
    DENSITY_GRID_POINTS: int = 500

    # Proportions: 1.0 -> 0.999 in the workshop's Beta regression example
    BOUNDARY_EPSILON: float = 0.001

    # Monte Carlo
    MC_SAMPLES: int = 50_000

    # Plotting
    PLOT_DPI: int = 300
    PLOT_FIGSIZE: tuple[float, float] = (10.0, 4.0)

    model_config = {
        "env_prefix": "BEYOND_OLS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
