"""
Directory endpoints: approved doctors, patients and counters.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole, IsDoctorOrAdmin
from ..serializers.auth import UserSerializer
from ..services.stats import approved_doctors, dashboard_stats, patients


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def doctor_list(request):
    """Approved doctors, optionally narrowed with ``?department=``."""
    qs = approved_doctors(request.query_params.get('department'))
    data = UserSerializer(qs, many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDoctorOrAdmin])
def patient_list(request):
    data = UserSerializer(patients(), many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_stats(request):
    return Response({'success': True, 'data': dashboard_stats()})
