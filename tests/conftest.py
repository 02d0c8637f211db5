import matplotlib

# tests write plots to files only
matplotlib.use("Agg")
