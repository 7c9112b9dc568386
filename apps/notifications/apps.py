from django.apps import AppConfig  # type: ignore


class NotificationsConfig(AppConfig):
    name = "apps.notifications"

    def ready(self) -> None:
        from shared.application.message_bus import message_bus

        from .subscribers import register

        register(message_bus)
