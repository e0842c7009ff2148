from rest_framework import serializers

from clinic.models import Appointment, User
from clinic.serializers.auth import DoctorSummarySerializer, UserSummarySerializer


class AppointmentCreateSerializer(serializers.Serializer):
    doctor = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(role=User.ROLE_DOCTOR, is_approved=True, is_active=True),
        error_messages={'does_not_exist': 'Doctor not found'},
    )
    appointmentDate = serializers.DateField(
        error_messages={'required': 'Please provide an appointment date'},
    )
    appointmentTime = serializers.CharField(
        max_length=50, error_messages={'required': 'Please provide an appointment time'},
    )
    department = serializers.CharField(max_length=64)
    reason = serializers.CharField(
        error_messages={'required': 'Please provide a reason for appointment'},
    )


class AppointmentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c[0] for c in Appointment.STATUS_CHOICES])
    notes = serializers.CharField(required=False, allow_blank=True)


class AppointmentSerializer(serializers.ModelSerializer):
    """Appointment with bare patient/doctor ids."""
    appointmentDate = serializers.DateField(source='appointment_date')
    appointmentTime = serializers.CharField(source='appointment_time')
    createdAt = serializers.DateTimeField(source='created_at')
    updatedAt = serializers.DateTimeField(source='updated_at')

    class Meta:
        model = Appointment
        fields = [
            'id', 'patient', 'doctor', 'appointmentDate', 'appointmentTime',
            'department', 'reason', 'status', 'notes', 'createdAt', 'updatedAt',
        ]
        read_only_fields = fields


class AppointmentDetailSerializer(AppointmentSerializer):
    """Appointment with patient and doctor contact details populated."""
    patient = UserSummarySerializer(read_only=True)
    doctor = DoctorSummarySerializer(read_only=True)
