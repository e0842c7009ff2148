from rest_framework import serializers

from clinic.models import Record, RecordDocument
from clinic.serializers.auth import UserSummarySerializer, DoctorSummarySerializer


class RecordCreateSerializer(serializers.Serializer):
    patient = serializers.IntegerField(
        min_value=1, error_messages={'required': 'Patient ID and diagnosis are required'},
    )
    diagnosis = serializers.CharField(
        error_messages={
            'required': 'Patient ID and diagnosis are required',
            'blank': 'Patient ID and diagnosis are required',
        },
    )
    prescription = serializers.CharField(required=False, allow_blank=True)
    testResults = serializers.CharField(required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class DocumentUploadSerializer(serializers.Serializer):
    document = serializers.FileField(error_messages={'required': 'Please upload a file'})


class RecordDocumentSerializer(serializers.ModelSerializer):
    path = serializers.FileField(source='file', use_url=False)
    contentType = serializers.CharField(source='content_type')
    uploadDate = serializers.DateTimeField(source='uploaded_at')

    class Meta:
        model = RecordDocument
        fields = ['id', 'filename', 'path', 'contentType', 'size', 'uploadDate']


class RecordSerializer(serializers.ModelSerializer):
    patient = UserSummarySerializer(read_only=True)
    doctor = DoctorSummarySerializer(read_only=True)
    visitDate = serializers.DateTimeField(source='visit_date')
    testResults = serializers.CharField(source='test_results')
    documents = RecordDocumentSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at')

    class Meta:
        model = Record
        fields = [
            'id', 'patient', 'doctor', 'visitDate', 'diagnosis', 'prescription',
            'testResults', 'notes', 'documents', 'createdAt',
        ]
