"""Rotas do webhook Jellyfin."""
