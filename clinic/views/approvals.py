"""
Administrator endpoints: dashboard counters and doctor approval.

New doctors cannot sign in until an administrator approves them here.
Rejecting an application deletes the account; the rejection e-mail and
the audit trail are all that remain of it.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import User
from ..permissions import IsAdminRole
from ..serializers.auth import DoctorAdminSerializer, UserSerializer
from ..services.accounts import approve_doctor, reject_doctor
from ..services.notifier import failure_of, get_notifier
from ..services.stats import dashboard_stats


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_stats(request):
    return Response({'success': True, 'data': dashboard_stats()})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def pending_doctors(request):
    """Doctors awaiting approval, oldest application first."""
    qs = User.objects.filter(role=User.ROLE_DOCTOR, is_approved=False).order_by('created_at')
    data = UserSerializer(qs, many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def all_doctors(request):
    qs = User.objects.filter(role=User.ROLE_DOCTOR).select_related('approved_by').order_by('-created_at')
    data = DoctorAdminSerializer(qs, many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsAdminRole])
def approve(request, doctor_id: int):
    doctor, future = approve_doctor(doctor_id, request.user, notifier=get_notifier())
    payload = {
        'success': True,
        'message': 'Doctor approved successfully. Email notification sent.',
        'data': {
            'id': doctor.id,
            'name': doctor.name,
            'email': doctor.email,
            'isApproved': doctor.is_approved,
            'approvedAt': doctor.approved_at,
        },
    }
    # Only reported when delivery already failed; async jobs are not awaited.
    error = failure_of(future)
    if error:
        payload['emailError'] = error
    return Response(payload)


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsAdminRole])
def reject(request, doctor_id: int):
    reason = request.data.get('reason') if hasattr(request.data, 'get') else None
    future = reject_doctor(doctor_id, request.user, reason, notifier=get_notifier())
    payload = {'success': True, 'message': 'Doctor application rejected'}
    error = failure_of(future)
    if error:
        payload['emailError'] = error
    return Response(payload)
