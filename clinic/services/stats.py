from clinic.models import Appointment, User


def dashboard_stats() -> dict:
    doctors = User.objects.filter(role=User.ROLE_DOCTOR)
    return {
        'totalPatients': User.objects.filter(role=User.ROLE_PATIENT).count(),
        'totalDoctors': doctors.filter(is_approved=True).count(),
        'pendingDoctors': doctors.filter(is_approved=False).count(),
        'totalAppointments': Appointment.objects.count(),
        'pendingAppointments': Appointment.objects.filter(status=Appointment.STATUS_PENDING).count(),
    }


def approved_doctors(department=None):
    qs = User.objects.filter(role=User.ROLE_DOCTOR, is_approved=True)
    if department:
        qs = qs.filter(department=department)
    return qs.order_by('name')


def patients():
    return User.objects.filter(role=User.ROLE_PATIENT).order_by('name')
