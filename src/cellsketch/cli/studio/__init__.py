"""Full-screen terminal applications."""
