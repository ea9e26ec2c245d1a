import matplotlib

# Plots in the analysis helpers must not open windows during tests.
matplotlib.use("Agg")
