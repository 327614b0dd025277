"""Infraestructura: pool DB y repositorios (Postgres / InMemory)."""
