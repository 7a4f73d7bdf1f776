"""REST API views for courses, role assignments, courseworks and coursework files."""

from django.contrib.auth import get_user_model
from django.http import Http404
from django.shortcuts import get_object_or_404

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.request import Request

from drf_spectacular.utils import (
    extend_schema,
    extend_schema_view,
    OpenApiResponse,
    OpenApiParameter,
)

from CourseworkApp.courses.models import Course
from CourseworkApp.coursework.models import Coursework, PersonalDeadline
from CourseworkApp.coursework.features import feature_summary
from CourseworkApp.coursework.navigation import settings_navigation
from CourseworkApp.core.permissions import IsCourseTeacher, IsCourseTeacherOrOwner
from CourseworkApp.core.text import records_to_menu
from CourseworkApp.domain.services import allocation_service, course_service, coursework_service, file_service
from CourseworkApp.api.serializers import (
    UserSerializer,
    CourseWriteSerializer,
    CourseReadSerializer,
    MembershipWriteSerializer,
    CourseworkWriteSerializer,
    CourseworkReadSerializer,
    PersonalDeadlineWriteSerializer,
    PersonalDeadlineReadSerializer,
    NavLinkSerializer,
)

AUTH_RESPONSES = {
    401: OpenApiResponse(description="Authentication required."),
    403: OpenApiResponse(description="Forbidden"),
    404: OpenApiResponse(description="Not Found"),
}

User = get_user_model()


# ---------- Courses ----------
@extend_schema_view(
    list=extend_schema(tags=["Courses"], responses={200: CourseReadSerializer(many=True), **AUTH_RESPONSES}),
    retrieve=extend_schema(tags=["Courses"], responses={200: CourseReadSerializer, **AUTH_RESPONSES}),
    create=extend_schema(tags=["Courses"], request=CourseWriteSerializer, responses={201: CourseReadSerializer, **AUTH_RESPONSES}),
    assign_role=extend_schema(tags=["Membership"], request=MembershipWriteSerializer, responses={200: UserSerializer, **AUTH_RESPONSES}),
    unassign_role=extend_schema(
        tags=["Membership"],
        parameters=[OpenApiParameter("user_id", int, OpenApiParameter.PATH)],
        responses={204: OpenApiResponse(description="Removed"), **AUTH_RESPONSES},
    ),
)
class CourseViewSet(viewsets.GenericViewSet):
    """Courses and role assignments."""
    permission_classes = [IsAuthenticated]
    serializer_class = CourseReadSerializer

    def get_queryset(self):
        return Course.objects.visible_to(self.request.user).select_related("owner").order_by("id")

    def get_permissions(self) -> list:
        if self.action in ("assign_role", "unassign_role"):
            return [IsAuthenticated(), IsCourseTeacherOrOwner()]
        return [IsAuthenticated()]

    def list(self, request: Request) -> Response:
        """List courses the user owns or belongs to."""
        qs = self.get_queryset()
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(CourseReadSerializer(page, many=True).data)
        return Response(CourseReadSerializer(qs, many=True).data)

    def retrieve(self, request: Request, pk: int | None = None) -> Response:
        return Response(CourseReadSerializer(self.get_object()).data)

    def create(self, request: Request) -> Response:
        """Create a course owned (and taught) by the requesting user."""
        ser = CourseWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        course = course_service.create_course(request.user, ser.validated_data["title"])
        return Response(CourseReadSerializer(course).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], url_path="members")
    def assign_role(self, request: Request, pk: int | None = None) -> Response:
        """Assign a course role to a user."""
        course = self.get_object()
        ser = MembershipWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = get_object_or_404(User, pk=ser.validated_data["user_id"])
        membership = course_service.assign_role(request.user, course, user, ser.validated_data["role"])
        return Response(UserSerializer(membership.user).data)

    @action(detail=True, methods=["delete"], url_path=r"members/(?P<user_id>\d+)")
    def unassign_role(self, request: Request, pk: int | None = None, user_id: int | None = None) -> Response:
        """Remove a member from the course."""
        course = self.get_object()
        user = get_object_or_404(User, pk=user_id)
        if not course_service.unassign_role(request.user, course, user):
            raise Http404("Not a member.")
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---------- Courseworks ----------
@extend_schema_view(
    list=extend_schema(tags=["Courseworks"], responses={200: CourseworkReadSerializer(many=True), **AUTH_RESPONSES}),
    retrieve=extend_schema(tags=["Courseworks"], responses={200: CourseworkReadSerializer, **AUTH_RESPONSES}),
    create=extend_schema(
        tags=["Courseworks"],
        request=CourseworkWriteSerializer,
        responses={201: CourseworkReadSerializer, **AUTH_RESPONSES},
        extensions={"x-permissions": {"required_roles": ["teacher"]}},
    ),
    update=extend_schema(
        tags=["Courseworks"],
        request=CourseworkWriteSerializer,
        responses={200: CourseworkReadSerializer, **AUTH_RESPONSES},
        description="Update a coursework. Students are messaged when any deadline changes.",
        extensions={"x-permissions": {"required_roles": ["teacher"]}},
    ),
    partial_update=extend_schema(
        tags=["Courseworks"],
        request=CourseworkWriteSerializer,
        responses={200: CourseworkReadSerializer, **AUTH_RESPONSES},
        extensions={"x-permissions": {"required_roles": ["teacher"]}},
    ),
    destroy=extend_schema(
        tags=["Courseworks"],
        responses={204: OpenApiResponse(description="Deleted"), **AUTH_RESPONSES},
        extensions={"x-permissions": {"required_roles": ["teacher"]}},
    ),
)
@extend_schema(parameters=[OpenApiParameter("course_pk", int, OpenApiParameter.PATH)])
class CourseworkViewSet(viewsets.ModelViewSet):
    """Coursework lifecycle plus navigation, allocation, personal deadlines and file downloads."""

    teacher_actions = {"create", "update", "partial_update", "destroy", "allocate", "personal_deadlines", "plagiarism_dates", "markers"}

    def get_permissions(self) -> list:
        if self.action in self.teacher_actions:
            return [IsAuthenticated(), IsCourseTeacher()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        return CourseworkWriteSerializer if self.action in ("create", "update", "partial_update") else CourseworkReadSerializer

    def get_queryset(self):
        """Courseworks of the nested course visible to the user."""
        if getattr(self, "swagger_fake_view", False):
            return Coursework.objects.none()
        return (
            Coursework.objects.visible_to(self.request.user)
            .filter(course_id=self.kwargs["course_pk"])
            .select_related("course")
            .order_by("id")
        )

    def create(self, request: Request, *args, **kwargs) -> Response:
        """Create a coursework in the course."""
        course = get_object_or_404(Course, pk=self.kwargs["course_pk"])
        ser = CourseworkWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        coursework = coursework_service.create_coursework(request.user, course, ser.validated_data)
        return Response(CourseworkReadSerializer(coursework).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, *args, **kwargs) -> Response:
        """Update a coursework; deadline changes notify enrolled students."""
        coursework = self.get_object()
        ser = CourseworkWriteSerializer(coursework, data=request.data, partial=kwargs.pop("partial", False))
        ser.is_valid(raise_exception=True)
        updated = coursework_service.update_coursework(request.user, coursework.pk, ser.validated_data)
        return Response(CourseworkReadSerializer(updated).data)

    def destroy(self, request: Request, *args, **kwargs) -> Response:
        coursework = self.get_object()
        coursework_service.delete_coursework(request.user, coursework.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(tags=["Courseworks"], responses={200: NavLinkSerializer(many=True), **AUTH_RESPONSES})
    @action(detail=True, methods=["get"])
    def navigation(self, request: Request, *args, **kwargs) -> Response:
        """Settings links available to the user for this coursework."""
        links = settings_navigation(request.user, self.get_object())
        return Response(NavLinkSerializer(links, many=True).data)

    @extend_schema(tags=["Courseworks"], responses={200: OpenApiResponse(description="File area name -> label"), **AUTH_RESPONSES})
    @action(detail=True, methods=["get"], url_path="file-areas")
    def file_areas(self, request: Request, *args, **kwargs) -> Response:
        return Response(file_service.file_areas(request.user, self.get_object()))

    @extend_schema(
        tags=["Files"],
        parameters=[
            OpenApiParameter("filearea", str, OpenApiParameter.PATH),
            OpenApiParameter("path", str, OpenApiParameter.PATH, description="<item id>/<file name>"),
        ],
        responses={200: OpenApiResponse(description="File download (always as attachment)."), **AUTH_RESPONSES},
    )
    @action(detail=True, methods=["get"], url_path=r"files/(?P<filearea>[a-z]+)/(?P<path>.+)")
    def files(self, request: Request, filearea: str | None = None, path: str | None = None, *args, **kwargs):
        """Download a submission or feedback file."""
        response = file_service.serve_file(request.user, self.get_object(), filearea, path.split("/"))
        if response is None:
            raise Http404("File not found.")
        return response

    @extend_schema(tags=["Allocation"], request=None, responses={200: OpenApiResponse(description="Whether an allocator ran."), **AUTH_RESPONSES})
    @action(detail=True, methods=["post"])
    def allocate(self, request: Request, *args, **kwargs) -> Response:
        """Run marker allocation for the coursework now."""
        processed = allocation_service.process_allocations(self.get_object())
        return Response({"processed": processed})

    @extend_schema(
        tags=["Courseworks"],
        request=PersonalDeadlineWriteSerializer,
        responses={200: PersonalDeadlineReadSerializer(many=True), 201: PersonalDeadlineReadSerializer, **AUTH_RESPONSES},
    )
    @action(detail=True, methods=["get", "post"], url_path="personal-deadlines")
    def personal_deadlines(self, request: Request, *args, **kwargs) -> Response:
        """List personal deadlines, or set one for a student."""
        coursework = self.get_object()
        if request.method == "GET":
            deadlines = PersonalDeadline.objects.filter(coursework=coursework).order_by("student_id")
            return Response(PersonalDeadlineReadSerializer(deadlines, many=True).data)
        ser = PersonalDeadlineWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        student = get_object_or_404(User, pk=ser.validated_data["student_id"])
        deadline = coursework_service.set_personal_deadline(
            request.user, coursework, student, ser.validated_data["personal_deadline"]
        )
        return Response(PersonalDeadlineReadSerializer(deadline).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Courseworks"], responses={200: OpenApiResponse(description="timeavailable/timedue/feedback"), **AUTH_RESPONSES})
    @action(detail=True, methods=["get"], url_path="plagiarism-dates")
    def plagiarism_dates(self, request: Request, *args, **kwargs) -> Response:
        return Response(coursework_service.plagiarism_dates(self.get_object()))

    @extend_schema(tags=["Courseworks"], responses={200: OpenApiResponse(description="Supported features and capabilities"), **AUTH_RESPONSES})
    @action(detail=True, methods=["get"])
    def features(self, request: Request, *args, **kwargs) -> Response:
        """Features and capabilities the activity advertises."""
        self.get_object()
        return Response(feature_summary())

    @extend_schema(tags=["Allocation"], responses={200: OpenApiResponse(description="User id -> email of possible markers"), **AUTH_RESPONSES})
    @action(detail=True, methods=["get"])
    def markers(self, request: Request, *args, **kwargs) -> Response:
        """Menu of course teachers who can be allocated as markers."""
        coursework = self.get_object()
        return Response(records_to_menu(coursework.teachers().order_by("id"), "pk", "email"))
