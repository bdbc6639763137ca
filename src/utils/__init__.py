"""Utilitários compartilhados (sem dependências de app/api)."""
