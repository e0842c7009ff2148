"""
Database models for the MediBook backend.

These models capture the core concepts of the system: users with a
role and an approval flag, appointments between a patient and a
doctor, medical records with uploaded documents, direct messages and
an audit trail.  Field names follow Python conventions; serializers
translate them to the camelCase keys the front-end expects.
"""
from __future__ import annotations

from django.contrib.auth.base_user import BaseUserManager
from django.contrib.auth.models import AbstractUser
from django.db import models


class UserManager(BaseUserManager):
    """Manager for the e-mail based :class:`User` model."""
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('The email must be set')
        email = self.normalize_email(email).lower()
        # Doctors wait for an administrator unless told otherwise.
        extra_fields.setdefault('is_approved', extra_fields.get('role') != User.ROLE_DOCTOR)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', User.ROLE_ADMIN)
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Portal account identified by e-mail.

    Roles are 'admin', 'doctor' and 'patient'.  Doctors start
    unapproved and cannot log in until an administrator approves them;
    every other role is approved on creation.
    """
    ROLE_ADMIN = 'admin'
    ROLE_DOCTOR = 'doctor'
    ROLE_PATIENT = 'patient'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Administrator'),
        (ROLE_DOCTOR, 'Doctor'),
        (ROLE_PATIENT, 'Patient'),
    ]
    DEPARTMENT_CHOICES = [
        ('Cardiology', 'Cardiology'),
        ('Neurology', 'Neurology'),
        ('Orthopedics', 'Orthopedics'),
        ('Pediatrics', 'Pediatrics'),
        ('Dermatology', 'Dermatology'),
        ('General Medicine', 'General Medicine'),
    ]
    GENDER_CHOICES = [
        ('Male', 'Male'),
        ('Female', 'Female'),
        ('Other', 'Other'),
    ]

    username = None
    first_name = None
    last_name = None

    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=32, blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_PATIENT, db_index=True)

    specialization = models.CharField(max_length=255, blank=True)
    department = models.CharField(max_length=64, choices=DEPARTMENT_CHOICES, blank=True)
    experience = models.PositiveIntegerField(null=True, blank=True)

    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True)
    address = models.TextField(blank=True)
    avatar = models.CharField(max_length=500, blank=True)

    is_approved = models.BooleanField(default=True)
    approved_by = models.ForeignKey(
        'self', null=True, blank=True, on_delete=models.SET_NULL, related_name='approved_doctors'
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    objects = UserManager()

    class Meta:
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.lower()
        super().save(*args, **kwargs)

    @property
    def is_doctor(self) -> bool:
        return self.role == self.ROLE_DOCTOR

    @property
    def is_patient(self) -> bool:
        return self.role == self.ROLE_PATIENT

    @property
    def is_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class Appointment(models.Model):
    """A booking between a patient and a doctor."""
    STATUS_PENDING = 'pending'
    STATUS_CONFIRMED = 'confirmed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_COMPLETED = 'completed'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_CONFIRMED, 'Confirmed'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_COMPLETED, 'Completed'),
    ]

    patient = models.ForeignKey(User, on_delete=models.CASCADE, related_name='patient_appointments')
    doctor = models.ForeignKey(User, null=True, on_delete=models.SET_NULL, related_name='doctor_appointments')
    appointment_date = models.DateField()
    appointment_time = models.CharField(max_length=50)
    department = models.CharField(max_length=64)
    reason = models.TextField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-appointment_date']

    def __str__(self) -> str:
        return f"{self.patient_id} with {self.doctor_id} on {self.appointment_date} ({self.status})"


class Record(models.Model):
    """A medical record authored by a doctor for a patient."""
    patient = models.ForeignKey(User, on_delete=models.CASCADE, related_name='medical_records')
    doctor = models.ForeignKey(User, null=True, on_delete=models.SET_NULL, related_name='authored_records')
    visit_date = models.DateTimeField()
    diagnosis = models.TextField()
    prescription = models.TextField(blank=True)
    test_results = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"Record {self.pk} for {self.patient_id}"


class RecordDocument(models.Model):
    record = models.ForeignKey(Record, on_delete=models.CASCADE, related_name='documents')
    filename = models.CharField(max_length=255)
    file = models.FileField(upload_to='records/%Y/%m/')
    content_type = models.CharField(max_length=100, blank=True)
    size = models.PositiveIntegerField(default=0)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['uploaded_at']

    def __str__(self) -> str:
        return self.filename


class Message(models.Model):
    """A direct message between two users."""
    sender = models.ForeignKey(User, null=True, on_delete=models.SET_NULL, related_name='sent_messages')
    receiver = models.ForeignKey(User, null=True, on_delete=models.SET_NULL, related_name='received_messages')
    content = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self) -> str:
        return f"{self.sender_id} -> {self.receiver_id}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='audit_events')
    action = models.CharField(max_length=64, db_index=True)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.BigIntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.action} {self.object_type}:{self.object_id}"
