import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import LineCollection, PolyCollection


def plot_graph(points, graph, *, voids=None, clusters=None, ax=None):
    P = np.asarray(points, dtype=np.float64)
    if ax is None:
        fig, ax = plt.subplots()

    segs = [(P[e.a], P[e.b]) for e in graph.edge_lengths]
    if segs:
        ax.add_collection(LineCollection(segs, colors="0.75", linewidths=0.5))

    if voids:
        triangles = graph.triangles
        for region in voids:
            polys = [P[list(triangles[t].vertices)] for t in region]
            ax.add_collection(PolyCollection(polys, facecolors="tab:red", alpha=0.35, edgecolors="none"))

    if len(P):
        ax.plot(*P.T, ".k", markersize=2)

    for c in clusters or ():
        ax.plot(*P[list(c)].T, "o", markersize=3)

    ax.autoscale_view()
    ax.set_aspect("equal")
    ax.set_title(f"{len(voids or ())} voids, {len(clusters or ())} clusters")
    return ax
