"""
Appointment endpoints.

Patients book appointments, every role lists the appointments it is
party to, administrators can list everything, and doctors or
administrators move appointments between statuses.  Notification
side effects live in :mod:`clinic.services.appointments`.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..exceptions import AuthorizationError
from ..permissions import IsAdminRole, IsDoctorOrAdmin, IsPatientRole
from ..serializers.appointment import (
    AppointmentCreateSerializer,
    AppointmentDetailSerializer,
    AppointmentSerializer,
    AppointmentStatusSerializer,
)
from ..services import appointments as svc
from ..services.notifier import get_notifier


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointments(request):
    if request.method == 'POST':
        return _create(request)
    qs = svc.list_appointments(request.user)
    data = AppointmentDetailSerializer(qs, many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


def _create(request):
    if not IsPatientRole().has_permission(request, None):
        raise AuthorizationError(IsPatientRole.message)
    s = AppointmentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    appointment = svc.create_appointment(
        request.user,
        doctor=vd['doctor'],
        appointment_date=vd['appointmentDate'],
        appointment_time=vd['appointmentTime'],
        department=vd['department'],
        reason=vd['reason'],
        notifier=get_notifier(),
    )
    return Response(
        {'success': True, 'message': 'Appointment requested', 'data': AppointmentDetailSerializer(appointment).data},
        status=status.HTTP_201_CREATED,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def all_appointments(request):
    """Every appointment in the system, newest date first (admin only)."""
    data = AppointmentDetailSerializer(svc.list_all_appointments(), many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsDoctorOrAdmin])
def update_appointment_status(request, appointment_id: int):
    s = AppointmentStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    appointment = svc.update_status(
        appointment_id,
        s.validated_data['status'],
        s.validated_data.get('notes'),
        actor=request.user,
        notifier=get_notifier(),
    )
    return Response({
        'success': True,
        'message': f'Appointment {appointment.status}',
        'data': AppointmentSerializer(appointment).data,
    })
