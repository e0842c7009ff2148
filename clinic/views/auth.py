"""
Registration, login and profile endpoints.

Login is by e-mail and password.  A doctor whose account has not been
approved is refused with 403 even when the password is right, which
lets the front-end show a "pending approval" screen instead of a
generic credentials error.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from ..serializers.auth import LoginSerializer, RegisterSerializer, UserSerializer
from ..services.accounts import authenticate_user, issue_token, register_user
from ..services.notifier import get_notifier


class LoginRateThrottle(AnonRateThrottle):
    scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user, token = register_user(s.validated_data, notifier=get_notifier())

    if user.is_doctor:
        return Response({
            'success': True,
            'message': 'Registration successful! Your account is pending admin approval. '
                       'You will receive an email once approved.',
            'data': {
                'id': user.id,
                'name': user.name,
                'email': user.email,
                'role': user.role,
                'isApproved': user.is_approved,
            },
        }, status=status.HTTP_201_CREATED)

    return Response({
        'success': True,
        'message': 'Registration successful',
        'data': {
            'id': user.id,
            'name': user.name,
            'email': user.email,
            'role': user.role,
            'phone': user.phone,
            'token': token,
        },
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    user = authenticate_user(vd['email'], vd['password'], ip=request.META.get('REMOTE_ADDR'))

    return Response({
        'success': True,
        'message': 'Login successful',
        'data': {
            'id': user.id,
            'name': user.name,
            'email': user.email,
            'role': user.role,
            'phone': user.phone,
            'specialization': user.specialization,
            'department': user.department,
            'isApproved': user.is_approved,
            'token': issue_token(user),
        },
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_view(request):
    """Return the authenticated user's own profile."""
    return Response({'success': True, 'data': UserSerializer(request.user).data})
