"""Foodie, a recipe catalogue driven by a server-side stack navigator."""
