# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # 01 — Vertical Stress Below a Strip Load
#
# Computes the vertical stress in an elastic half-space loaded by a
# uniform strip load and draws the colour-mapped stress chart.
#
# **Closed-form solution (Boussinesq/Carothers):**
#
# $$\sigma_z = \frac{q}{\pi}\left(\alpha + \sin\alpha\,\cos(\alpha + 2\beta)\right)$$
#
# with $\alpha$ the angle subtended by the load and $\beta$ the angle
# from the vertical to the load edge.

# %%
import logging

from stripstress import GridSpec, LoadParameters, build_stress_field
from stripstress.logging_config import setup_logging

setup_logging(logging.INFO)

# %% [markdown]
# ## 1. Load and grid
#
# A 5 m wide strip carrying 10 kN/m², evaluated 7 b to each side and
# 7 b deep with 200 cells per b.

# %%
load = LoadParameters(b=5.0, q=10.0)
grid = GridSpec(s=200, w=7, h=7)
field = build_stress_field(load, grid, workers=4)
print(field)

# %% [markdown]
# ## 2. Stress under the centreline

# %%
for z in (1.0, 2.5, 5.0, 10.0, 20.0):
    print(f"z = {z:5.1f} m   σz = {field.at(0.0, z):6.3f} kN/m²")

# %% [markdown]
# ## 3. Pressure bulb

# %%
from stripstress import postprocess

for fraction in (0.5, 0.2, 0.1):
    depth = postprocess.influence_depth(load, fraction)
    d_grid, half_width = postprocess.isobar_extent(field, fraction)
    print(f"{fraction:.1f} q: depth {depth:6.2f} m (grid {d_grid:6.2f} m), "
          f"half-width {half_width:5.2f} m")

# %% [markdown]
# ## 4. Stress chart

# %%
from stripstress.visualization import FieldRenderer, ImageSurface, RenderSpec

surface = ImageSurface(800, 800)
FieldRenderer(surface, grid, RenderSpec(graph_distance=2)).render(field)
surface.save("strip_load_chart.png")

# %% [markdown]
# ## 5. Contour plot and depth profile

# %%
import matplotlib.pyplot as plt
from stripstress.visualization import plot_profile

field.plot()
plot_profile(field, x=0.0)
plt.tight_layout()
plt.show()

# %% [markdown]
# ## Key Takeaways
#
# - Directly under the load the stress equals q at the surface and
#   decays with depth; at the load edges it starts at q/2.
# - The 0.1 q isobar reaches about 6.4 b below the centre.
# - The field is symmetric about the centreline.
