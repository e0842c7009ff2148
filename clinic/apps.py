from django.apps import AppConfig


class ClinicConfig(AppConfig):
    name = 'clinic'
    verbose_name = 'Clinic'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        # Mail/SMS clients and the dispatcher pool live for the whole process.
        from clinic.services.notifier import build_notifier, set_notifier
        set_notifier(build_notifier())
