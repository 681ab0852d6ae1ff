"""
REST API router for knowledge base operations.

Provides FastAPI routes that expose the topic, resource and user
repositories and the auth service via HTTP endpoints. This module handles
HTTP-specific concerns like bearer-token checks, role gating, pagination
and mapping of error kinds to status codes. Misses raise NotFound, which
the app host answers with 404.

Usage:
    from fastapi import FastAPI
    from knowledge_base.service import create_rest_router

    app = FastAPI()
    app.add_exception_handler(NotFound, not_found_handler)
    router = create_rest_router(topics, resources, users, auth)
    app.include_router(router, prefix="/api")
"""

from typing import List, Optional, Dict, Any, Callable
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field

from knowledge_base.core import AuthenticationError, NotFound, UserRole

from .auth import AuthService, TokenPayload
from .resources import ResourceRepository
from .topics import TopicRepository
from .users import UserRepository
from .serializers import (
    serialize_model, serialize_models, serialize_hierarchy,
    serialize_page, serialize_auth_result,
)

MAX_PAGE_LIMIT = 100


# ==================== Request Models ====================

class CreateTopicRequest(BaseModel):
    """Request model for creating a topic."""
    name: str = Field(..., min_length=1, description="Topic name")
    content: str = Field(..., description="Topic body")
    parent_topic_id: Optional[str] = Field(None, description="Parent topic ID (omit for a root topic)")


class UpdateTopicRequest(BaseModel):
    """Request model for updating a topic. Send parent_topic_id: null to clear the parent."""
    name: Optional[str] = Field(None, description="New name")
    content: Optional[str] = Field(None, description="New content (records a version)")
    parent_topic_id: Optional[str] = Field(None, description="New parent topic ID")


class CreateResourceRequest(BaseModel):
    """Request model for creating a resource."""
    topic_id: str = Field(..., description="Topic the resource belongs to")
    url: str = Field(..., description="Resource location")
    description: str = Field("", description="Short description")
    type: str = Field(..., description="video, article or pdf")


class UpdateResourceRequest(BaseModel):
    """Request model for updating a resource."""
    topic_id: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None


class CreateUserRequest(BaseModel):
    """Request model for registering a user."""
    name: str = Field(..., min_length=1)
    email: str = Field(...)
    password: Optional[str] = Field(None, description="Plain password, stored hashed")
    role: Optional[str] = Field(None, description="Admin, Editor or Viewer (default Viewer)")


class UpdateUserRequest(BaseModel):
    """Request model for updating a user."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(BaseModel):
    """Request model for login."""
    email: str
    password: str


class RefreshTokenRequest(BaseModel):
    """Request model for logout and token refresh."""
    refresh_token: str


# ==================== Router Factory ====================

def create_rest_router(
    topics: TopicRepository,
    resources: ResourceRepository,
    users: UserRepository,
    auth: AuthService,
    prefix: str = "",
) -> APIRouter:
    """
    Create a FastAPI router with all knowledge base endpoints.

    Args:
        topics: Topic repository
        resources: Resource repository
        users: User repository
        auth: Auth service used to verify bearer tokens
        prefix: Optional URL prefix for all routes

    Returns:
        Configured APIRouter
    """
    router = APIRouter(prefix=prefix)
    bearer = HTTPBearer(auto_error=False)

    # ==================== Auth Dependencies ====================

    def current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    ) -> TokenPayload:
        if credentials is None or not credentials.credentials:
            raise HTTPException(status_code=401, detail="Access token is required")
        try:
            return auth.verify_access_token(credentials.credentials)
        except AuthenticationError as e:
            raise HTTPException(status_code=401, detail=str(e))

    def require_roles(*roles: UserRole) -> Callable[..., TokenPayload]:
        def check_role(user: TokenPayload = Depends(current_user)) -> TokenPayload:
            if user.role not in roles:
                raise HTTPException(status_code=403, detail="Forbidden")
            return user
        return check_role

    authenticated = Depends(current_user)
    editors = Depends(require_roles(UserRole.ADMIN, UserRole.EDITOR))
    admins = Depends(require_roles(UserRole.ADMIN))

    def paginate(repository, page: int, limit: int) -> Dict[str, Any]:
        skip = (page - 1) * limit
        items = repository.find_all(skip, limit)
        return serialize_page(items, page, limit, repository.count())

    # ==================== Topic Endpoints ====================

    @router.get("/topics", tags=["topics"], dependencies=[authenticated])
    async def list_topics(
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=MAX_PAGE_LIMIT),
    ) -> Dict[str, Any]:
        """List topics, one page at a time."""
        return paginate(topics, page, limit)

    @router.get("/topics/hierarchy", tags=["topics"], dependencies=[authenticated])
    async def get_hierarchy(root_id: Optional[str] = Query(None)) -> List[Dict[str, Any]]:
        """Topic trees, either all roots or the tree under root_id."""
        return serialize_hierarchy(topics.get_hierarchy(root_id))

    @router.get("/topics/path/{start_id}/{end_id}", tags=["topics"], dependencies=[authenticated])
    async def find_path(start_id: str, end_id: str) -> List[Dict[str, Any]]:
        """Shortest parent/child path between two topics."""
        path = topics.find_path(start_id, end_id)
        if not path:
            raise NotFound("No path found between topics")
        return serialize_models(path)

    @router.get("/topics/{topic_id}", tags=["topics"], dependencies=[authenticated])
    async def get_topic(topic_id: str) -> Dict[str, Any]:
        topic = topics.find_by_id(topic_id)
        if topic is None:
            raise NotFound("Item not found")
        return serialize_model(topic)

    @router.get("/topics/{topic_id}/versions", tags=["topics"], dependencies=[authenticated])
    async def get_versions(topic_id: str) -> List[Dict[str, Any]]:
        """All recorded versions of a topic, oldest first."""
        return serialize_models(topics.get_versions(topic_id))

    @router.get("/topics/{topic_id}/versions/{version}", tags=["topics"], dependencies=[authenticated])
    async def get_version(topic_id: str, version: int) -> Dict[str, Any]:
        snapshot = topics.get_version(topic_id, version)
        if snapshot is None:
            raise NotFound("Version not found")
        return serialize_model(snapshot)

    @router.post("/topics", status_code=201, tags=["topics"], dependencies=[authenticated])
    async def create_topic(request: CreateTopicRequest) -> Dict[str, Any]:
        try:
            topic = topics.create(request.model_dump())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return serialize_model(topic)

    @router.put("/topics/{topic_id}", tags=["topics"], dependencies=[editors])
    async def update_topic(topic_id: str, request: UpdateTopicRequest) -> Dict[str, Any]:
        """Update a topic; only fields present in the body are applied."""
        try:
            topic = topics.update(topic_id, request.model_dump(exclude_unset=True))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if topic is None:
            raise NotFound("Item not found")
        return serialize_model(topic)

    @router.delete("/topics/{topic_id}", status_code=204, tags=["topics"], dependencies=[admins])
    async def delete_topic(topic_id: str) -> Response:
        if not topics.delete(topic_id):
            raise NotFound("Item not found")
        return Response(status_code=204)

    # ==================== Resource Endpoints ====================

    @router.get("/resources", tags=["resources"], dependencies=[authenticated])
    async def list_resources(
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=MAX_PAGE_LIMIT),
    ) -> Dict[str, Any]:
        return paginate(resources, page, limit)

    @router.get("/resources/topic/{topic_id}", tags=["resources"], dependencies=[authenticated])
    async def get_resources_by_topic(topic_id: str) -> List[Dict[str, Any]]:
        """All resources attached to a topic."""
        return serialize_models(resources.find_by_topic_id(topic_id))

    @router.get("/resources/{resource_id}", tags=["resources"], dependencies=[authenticated])
    async def get_resource(resource_id: str) -> Dict[str, Any]:
        resource = resources.find_by_id(resource_id)
        if resource is None:
            raise NotFound("Item not found")
        return serialize_model(resource)

    @router.post("/resources", status_code=201, tags=["resources"], dependencies=[authenticated])
    async def create_resource(request: CreateResourceRequest) -> Dict[str, Any]:
        try:
            resource = resources.create(request.model_dump())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return serialize_model(resource)

    @router.put("/resources/{resource_id}", tags=["resources"], dependencies=[editors])
    async def update_resource(resource_id: str, request: UpdateResourceRequest) -> Dict[str, Any]:
        try:
            resource = resources.update(resource_id, request.model_dump(exclude_unset=True))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if resource is None:
            raise NotFound("Item not found")
        return serialize_model(resource)

    @router.delete("/resources/{resource_id}", status_code=204, tags=["resources"], dependencies=[admins])
    async def delete_resource(resource_id: str) -> Response:
        if not resources.delete(resource_id):
            raise NotFound("Item not found")
        return Response(status_code=204)

    # ==================== User & Session Endpoints ====================
    # Handlers that hash or verify passwords are sync so bcrypt runs in the threadpool

    @router.post("/users/login", tags=["users"])
    def login(request: LoginRequest) -> Dict[str, Any]:
        """Exchange email/password for an access and refresh token."""
        try:
            result = auth.authenticate(request.email, request.password)
        except AuthenticationError as e:
            raise HTTPException(status_code=401, detail=str(e))
        return serialize_auth_result(result)

    @router.post("/users/logout", tags=["users"], dependencies=[authenticated])
    async def logout(request: RefreshTokenRequest) -> Dict[str, Any]:
        try:
            auth.logout(request.refresh_token)
        except AuthenticationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"message": "Logged out successfully"}

    @router.post("/users/refresh-token", tags=["users"], dependencies=[authenticated])
    async def refresh_token(request: RefreshTokenRequest) -> Dict[str, Any]:
        try:
            return auth.refresh(request.refresh_token)
        except AuthenticationError as e:
            raise HTTPException(status_code=401, detail=str(e))

    @router.post("/users", status_code=201, tags=["users"])
    def create_user(request: CreateUserRequest) -> Dict[str, Any]:
        """Register a new user."""
        try:
            user = users.create(request.model_dump(exclude_none=True))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return serialize_model(user)

    @router.get("/users", tags=["users"], dependencies=[admins])
    async def list_users(
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=MAX_PAGE_LIMIT),
    ) -> Dict[str, Any]:
        return paginate(users, page, limit)

    @router.get("/users/role/{role}", tags=["users"], dependencies=[admins])
    async def get_users_by_role(role: str) -> List[Dict[str, Any]]:
        try:
            return serialize_models(users.find_by_role(role))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @router.get("/users/{user_id}", tags=["users"], dependencies=[admins])
    async def get_user(user_id: str) -> Dict[str, Any]:
        user = users.find_by_id(user_id)
        if user is None:
            raise NotFound("Item not found")
        return serialize_model(user)

    @router.put("/users/{user_id}", tags=["users"], dependencies=[admins])
    def update_user(user_id: str, request: UpdateUserRequest) -> Dict[str, Any]:
        try:
            user = users.update(user_id, request.model_dump(exclude_none=True))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if user is None:
            raise NotFound("Item not found")
        return serialize_model(user)

    @router.delete("/users/{user_id}", status_code=204, tags=["users"], dependencies=[admins])
    async def delete_user(user_id: str) -> Response:
        if not users.delete(user_id):
            raise NotFound("Item not found")
        return Response(status_code=204)

    return router
