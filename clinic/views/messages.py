"""
Direct messages between users.

Any authenticated user may message any active user.  Markup is
stripped from message bodies before they are stored.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..serializers.auth import ParticipantSerializer
from ..serializers.message import MessageCreateSerializer, MessageSerializer
from ..services import messaging


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def send_message(request):
    s = MessageCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    msg = messaging.send_message(request.user, s.validated_data['receiver'], s.validated_data['content'])
    return Response({'success': True, 'data': MessageSerializer(msg).data}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def conversations(request):
    """Latest message per counterpart, most recent conversation first."""
    data = [
        {
            'user': ParticipantSerializer(item['user']).data,
            'lastMessage': MessageSerializer(item['lastMessage']).data,
        }
        for item in messaging.conversations(request.user)
    ]
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def thread(request, user_id: int):
    data = MessageSerializer(messaging.thread_with(request.user, user_id), many=True).data
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def mark_read(request, user_id: int):
    updated = messaging.mark_read(request.user, user_id)
    return Response({'success': True, 'message': 'Messages marked as read', 'count': updated})
