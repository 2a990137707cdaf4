"""
Diagnostic plot of a body's radiation impulse-response kernel.
"""

from hydroloads.coefficients.store import HydroCoefficientStore

DOF_LABELS = ['surge', 'sway', 'heave', 'roll', 'pitch', 'yaw']


def plot_impulse_response(store: HydroCoefficientStore, output_path: str,
                          verbose: bool = True):
    """
    Generate a PNG plot of the diagonal impulse-response functions K(i, i, t).

    Args:
        store: Loaded coefficient store
        output_path: Path for output PNG file
        verbose: Print the output path when done
    """
    import matplotlib
    matplotlib.use('Agg')  # Non-interactive backend
    import matplotlib.pyplot as plt

    kernel = store.impulse_response
    times = store.time_samples

    fig, (ax_trans, ax_rot) = plt.subplots(2, 1, figsize=(10, 8), sharex=True)

    for i in range(store.dof_count):
        ax = ax_trans if i < 3 else ax_rot
        label = DOF_LABELS[i] if i < len(DOF_LABELS) else f'dof {i}'
        ax.plot(times, kernel[i, i, :], linewidth=1.5, label=label)

    ax_trans.set_ylabel('K translational (N/m)', fontsize=12)
    ax_rot.set_ylabel('K rotational (Nm/rad)', fontsize=12)
    ax_rot.set_xlabel('Lag time (s)', fontsize=12)
    for ax in (ax_trans, ax_rot):
        ax.axhline(y=0, color='gray', linestyle='--', alpha=0.5)
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right')

    stats_text = (
        f"rho: {store.rho:.1f} kg/m³\n"
        f"S: {store.step_count} steps, dt: {store.timestep:.4g} s"
    )
    ax_trans.text(0.02, 0.98, stats_text, transform=ax_trans.transAxes, fontsize=10,
                  verticalalignment='top', bbox=dict(boxstyle='round', facecolor='white', alpha=0.8))

    fig.suptitle(f'Radiation Impulse Response - {store.body}', fontsize=14)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    if verbose:
        print(f"✓ Impulse response plot saved to {output_path}")
