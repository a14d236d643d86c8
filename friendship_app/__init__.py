"""Клиент сервиса дружбы: сессия, API клиент и состояние списков друзей."""
