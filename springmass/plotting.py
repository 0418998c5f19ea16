from __future__ import annotations

from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")  # ensure no GUI windows/dialogs

import matplotlib.pyplot as plt


DEFAULT_DPI = 160


def plot_trajectory(
    time_s: np.ndarray,
    positions: np.ndarray,
    mass_names: list[str],
    out_path: Path,
    *,
    title: str = "Mass Trajectories",
    dpi: int = DEFAULT_DPI,
) -> None:
    """Plot x/y paths of the tracked masses with x(t), y(t) subplot below.

    positions: (T, M, 2)
    """
    fig, (ax1, ax2) = plt.subplots(
        2, 1, figsize=(10, 11), gridspec_kw={"height_ratios": [3, 1]}
    )

    n = positions.shape[1]
    colors = plt.cm.viridis(np.linspace(0, 0.9, max(n, 1)))

    for j in range(n):
        x = positions[:, j, 0]
        y = positions[:, j, 1]
        ax1.plot(x, y, linewidth=0.8, color=colors[j], label=mass_names[j])
        if x.size:
            ax1.plot(x[0], y[0], marker="o", color=colors[j], markersize=5)

        ax2.plot(time_s, x, linewidth=1.0, color=colors[j], linestyle="--", label=f"x {mass_names[j]}")
        ax2.plot(time_s, y, linewidth=1.0, color=colors[j], label=f"y {mass_names[j]}")

    ax1.set_xlabel("x")
    ax1.set_ylabel("y")
    ax1.set_title(title)
    ax1.set_aspect("equal", adjustable="datalim")
    ax1.grid(True, alpha=0.3)
    ax1.legend(loc="upper right", fontsize=8)

    ax2.set_xlabel("Time (s)")
    ax2.set_ylabel("Position")
    ax2.grid(True, alpha=0.3)
    ax2.legend(ncol=2, fontsize=8)

    plt.tight_layout()
    plt.savefig(out_path, dpi=dpi)
    plt.close(fig)


def plot_energy(
    time_s: np.ndarray,
    energy: np.ndarray,
    out_path: Path,
    *,
    title: str = "Total Mechanical Energy",
    dpi: int = DEFAULT_DPI,
) -> None:
    """Plot total energy and its drift relative to the initial value."""
    e0 = float(energy[0]) if energy.size else 0.0
    drift = energy - e0

    fig, (ax1, ax2) = plt.subplots(
        2, 1, figsize=(12, 7), sharex=True, gridspec_kw={"height_ratios": [2, 1]}
    )

    ax1.plot(time_s, energy, color="tab:blue", linewidth=1.0)
    ax1.set_ylabel("Energy")
    ax1.set_title(title)
    ax1.grid(True, alpha=0.3)

    ax2.plot(time_s, drift, color="tab:red", linewidth=1.0)
    ax2.axhline(y=0, color="gray", linewidth=0.8, linestyle="--")
    ax2.set_xlabel("Time (s)")
    ax2.set_ylabel("E - E0")
    ax2.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(out_path, dpi=dpi)
    plt.close(fig)
