"""Lampreas Violeta — clients, commercial agents and delivery drivers desk."""
