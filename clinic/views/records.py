"""
Medical record endpoints.

Doctors write records and attach documents to the records they
authored.  Patients only ever see their own records; doctors and
administrators may read any patient's history.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..exceptions import AuthorizationError
from ..permissions import IsDoctorOrAdmin, IsDoctorRole
from ..serializers.record import DocumentUploadSerializer, RecordCreateSerializer, RecordSerializer
from ..services import records as svc


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def records(request):
    if request.method == 'POST':
        if not IsDoctorRole().has_permission(request, None):
            raise AuthorizationError(IsDoctorRole.message)
        s = RecordCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = s.validated_data
        record = svc.create_record(
            request.user,
            patient_id=vd['patient'],
            diagnosis=vd['diagnosis'],
            prescription=vd.get('prescription', ''),
            test_results=vd.get('testResults', ''),
            notes=vd.get('notes', ''),
        )
        return Response(
            {'success': True, 'message': 'Medical record created', 'data': RecordSerializer(record).data},
            status=status.HTTP_201_CREATED,
        )

    data = RecordSerializer(svc.list_records(request.user), many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDoctorOrAdmin])
def patient_records(request, patient_id: int):
    data = RecordSerializer(svc.list_records(request.user, patient_id), many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDoctorRole])
@parser_classes([MultiPartParser, FormParser])
def upload_document(request, record_id: int):
    s = DocumentUploadSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    record = svc.attach_document(request.user, record_id, s.validated_data['document'])
    return Response({'success': True, 'message': 'Document uploaded', 'data': RecordSerializer(record).data})
