from rest_framework import serializers

from clinic.models import Message, User
from clinic.serializers.auth import ParticipantSerializer


class MessageCreateSerializer(serializers.Serializer):
    receiver = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(is_active=True),
        error_messages={'does_not_exist': 'Receiver not found'},
    )
    content = serializers.CharField(max_length=5000)


class MessageSerializer(serializers.ModelSerializer):
    sender = ParticipantSerializer(read_only=True)
    receiver = ParticipantSerializer(read_only=True)
    isRead = serializers.BooleanField(source='is_read')
    createdAt = serializers.DateTimeField(source='created_at')

    class Meta:
        model = Message
        fields = ['id', 'sender', 'receiver', 'content', 'isRead', 'createdAt']
