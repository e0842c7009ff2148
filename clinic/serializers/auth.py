from rest_framework import serializers

from clinic.models import User


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)

    def validate_email(self, v):
        v = (v or '').strip().lower()
        if not v:
            raise serializers.ValidationError('Please provide email and password')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Please provide email and password')
        return v


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True, trim_whitespace=False)
    phone = serializers.CharField(max_length=32)
    # Administrators are only created by the seeder or the Django admin.
    role = serializers.ChoiceField(choices=[User.ROLE_PATIENT, User.ROLE_DOCTOR], default=User.ROLE_PATIENT)
    specialization = serializers.CharField(max_length=255, required=False, allow_blank=True)
    department = serializers.ChoiceField(choices=User.DEPARTMENT_CHOICES, required=False, allow_blank=True)
    experience = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    dateOfBirth = serializers.DateField(required=False, allow_null=True)
    gender = serializers.ChoiceField(choices=User.GENDER_CHOICES, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)

    def validate_email(self, v):
        v = v.strip().lower()
        if User.objects.filter(email=v).exists():
            raise serializers.ValidationError('User with this email already exists')
        return v

    def validate(self, attrs):
        if attrs.get('role') == User.ROLE_DOCTOR and not (attrs.get('specialization') and attrs.get('department')):
            raise serializers.ValidationError('Specialization and department are required for doctors')
        return attrs


class UserBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email']


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'phone']


class DoctorSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'phone', 'specialization', 'department']


class ParticipantSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'role', 'avatar']


class UserSerializer(serializers.ModelSerializer):
    """Full profile; never exposes the password hash."""
    dateOfBirth = serializers.DateField(source='date_of_birth', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    isApproved = serializers.BooleanField(source='is_approved', read_only=True)
    approvedAt = serializers.DateTimeField(source='approved_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'name', 'email', 'phone', 'role',
            'specialization', 'department', 'experience',
            'dateOfBirth', 'gender', 'address', 'avatar',
            'isActive', 'isApproved', 'approvedAt', 'createdAt',
        ]


class DoctorAdminSerializer(UserSerializer):
    approvedBy = UserBriefSerializer(source='approved_by', read_only=True)

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ['approvedBy']
