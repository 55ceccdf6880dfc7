from django.apps import AppConfig


class EngineConfig(AppConfig):
    name = 'engine'

    def ready(self):
        """Assemble the markdown pipeline once, before any render runs."""
        from engine.markdown.renderer import get_default_renderer

        get_default_renderer()
