from django.apps import AppConfig


class ThemeToggleConfig(AppConfig):
    name = "theme_toggle"
    verbose_name = "Theme toggle"

    def ready(self):
        # The global config may have been built before settings were ready
        from theme_toggle.config import config

        config.reset()
