"""VocabDeck service - REST API over accounts, categories and cards."""

from contextlib import asynccontextmanager
from typing import Annotated, Any, Callable, List, Optional

from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware

from vocabdeck.accounts import AccountIdentity, IdentityStore, TokenService
from vocabdeck.core import VocabDeck
from vocabdeck.services.auth import make_token_dependency
from vocabdeck.services.errors import register_exception_handlers
from vocabdeck.services.middleware import RequestLoggingMiddleware
from vocabdeck.services.types import (
    AuthResponse,
    CardCreatePayload,
    CardUpdatePayload,
    CategoryPayload,
    CredentialsPayload,
    ErrorResponse,
    OkResponse,
)
from vocabdeck.store import Card, Category, DocumentStore, LocalDocumentBackend


class VocabDeckService(VocabDeck):
    """Service exposing registration, login, and per-account category and card management.

    Every authenticated handler resolves the caller from the bearer token and then reads or rewrites that account's
    whole document. Mutations run inside ``DocumentStore.transaction`` so requests against the same account are
    applied one at a time.

    Collaborators default to file-backed implementations rooted at ``VOCABDECK_DIR_PATHS.DATA_DIR``; tests inject
    their own.
    """

    def __init__(
        self,
        *,
        documents: Optional[DocumentStore] = None,
        identities: Optional[IdentityStore] = None,
        tokens: Optional[TokenService] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        settings = self.settings
        self.documents = documents or DocumentStore(
            LocalDocumentBackend(settings.documents_dir, settings=settings), settings=settings
        )
        self.identities = identities or IdentityStore(settings.users_path, self.documents, settings=settings)
        self.tokens = tokens or TokenService(settings=settings)

        self.app = FastAPI(
            title="VocabDeck",
            summary="Vocabulary flashcard backend",
            description="Per-account vocabulary categories and cards behind bearer-token authentication.",
            lifespan=self._lifespan,
            responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        )
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.VOCABDECK_SERVER.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        self.app.add_middleware(RequestLoggingMiddleware, logger=self.logger)
        register_exception_handlers(self.app)

        self._current_user = make_token_dependency(self.tokens)

        self._register_status_endpoints()
        self._register_auth_endpoints()
        self._register_category_endpoints()
        self._register_card_endpoints()

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        self.identities.ensure_exists()
        self.logger.info(f"VocabDeck service started, data directory: {self.settings.data_dir}")
        yield

    def add_endpoint(
        self,
        path: str,
        func: Callable[..., Any],
        *,
        methods: list[str],
        status_code: int = status.HTTP_200_OK,
        response_model: Any = None,
    ):
        """Register a new endpoint on the underlying FastAPI app."""
        self.app.add_api_route(
            path,
            endpoint=func,
            methods=methods,
            status_code=status_code,
            response_model=response_model,
            name=func.__name__,
        )

    # -------------------------------------------------------------------------
    # Endpoint registration
    # -------------------------------------------------------------------------

    def _register_status_endpoints(self) -> None:
        def status_check() -> OkResponse:
            return OkResponse()

        self.add_endpoint("/", status_check, methods=["GET"], response_model=OkResponse)

    def _register_auth_endpoints(self) -> None:
        get_current_user = self._current_user

        def register(payload: CredentialsPayload) -> AuthResponse:
            return self.register(payload)

        def login(payload: CredentialsPayload) -> AuthResponse:
            return self.login(payload)

        def me(current_user: Annotated[AccountIdentity, Depends(get_current_user)]) -> AccountIdentity:
            return current_user

        self.add_endpoint("/auth/register", register, methods=["POST"], response_model=AuthResponse)
        self.add_endpoint("/auth/login", login, methods=["POST"], response_model=AuthResponse)
        self.add_endpoint("/me", me, methods=["GET"], response_model=AccountIdentity)

    def _register_category_endpoints(self) -> None:
        get_current_user = self._current_user
        CurrentUser = Annotated[AccountIdentity, Depends(get_current_user)]

        def list_categories(current_user: CurrentUser) -> List[Category]:
            return self.list_categories(current_user)

        def get_category(category_id: str, current_user: CurrentUser) -> Category:
            return self.get_category(current_user, category_id)

        def create_category(payload: CategoryPayload, current_user: CurrentUser) -> Category:
            return self.create_category(current_user, payload)

        def rename_category(category_id: str, payload: CategoryPayload, current_user: CurrentUser) -> Category:
            return self.rename_category(current_user, category_id, payload)

        def delete_category(category_id: str, current_user: CurrentUser) -> OkResponse:
            return self.delete_category(current_user, category_id)

        self.add_endpoint("/categories", list_categories, methods=["GET"], response_model=List[Category])
        self.add_endpoint(
            "/categories",
            create_category,
            methods=["POST"],
            status_code=status.HTTP_201_CREATED,
            response_model=Category,
        )
        self.add_endpoint("/categories/{category_id}", get_category, methods=["GET"], response_model=Category)
        self.add_endpoint("/categories/{category_id}", rename_category, methods=["PUT"], response_model=Category)
        self.add_endpoint("/categories/{category_id}", delete_category, methods=["DELETE"], response_model=OkResponse)

    def _register_card_endpoints(self) -> None:
        get_current_user = self._current_user
        CurrentUser = Annotated[AccountIdentity, Depends(get_current_user)]

        def list_cards(category_id: str, current_user: CurrentUser) -> List[Card]:
            return self.list_cards(current_user, category_id)

        def create_card(category_id: str, payload: CardCreatePayload, current_user: CurrentUser) -> Card:
            return self.create_card(current_user, category_id, payload)

        def update_card(card_id: str, payload: CardUpdatePayload, current_user: CurrentUser) -> Card:
            return self.update_card(current_user, card_id, payload)

        def delete_card(card_id: str, current_user: CurrentUser) -> OkResponse:
            return self.delete_card(current_user, card_id)

        self.add_endpoint("/categories/{category_id}/cards", list_cards, methods=["GET"], response_model=List[Card])
        self.add_endpoint(
            "/categories/{category_id}/cards",
            create_card,
            methods=["POST"],
            status_code=status.HTTP_201_CREATED,
            response_model=Card,
        )
        self.add_endpoint("/cards/{card_id}", update_card, methods=["PUT"], response_model=Card)
        self.add_endpoint("/cards/{card_id}", delete_card, methods=["DELETE"], response_model=OkResponse)

    # -------------------------------------------------------------------------
    # Auth handlers
    # -------------------------------------------------------------------------

    def register(self, payload: CredentialsPayload) -> AuthResponse:
        account = self.identities.register(payload.username, payload.password)
        return AuthResponse(token=self.tokens.issue(account), user=account.public())

    def login(self, payload: CredentialsPayload) -> AuthResponse:
        account = self.identities.authenticate(payload.username, payload.password)
        self.logger.info(f"Account {account.id} logged in.")
        return AuthResponse(token=self.tokens.issue(account), user=account.public())

    # -------------------------------------------------------------------------
    # Category handlers
    # -------------------------------------------------------------------------

    def list_categories(self, user: AccountIdentity) -> List[Category]:
        return self.documents.load(user.id).list_categories()

    def get_category(self, user: AccountIdentity, category_id: str) -> Category:
        return self.documents.load(user.id).get_category(category_id)

    def create_category(self, user: AccountIdentity, payload: CategoryPayload) -> Category:
        with self.documents.transaction(user.id) as document:
            return document.create_category(payload.name)

    def rename_category(self, user: AccountIdentity, category_id: str, payload: CategoryPayload) -> Category:
        with self.documents.transaction(user.id) as document:
            return document.rename_category(category_id, payload.name)

    def delete_category(self, user: AccountIdentity, category_id: str) -> OkResponse:
        with self.documents.transaction(user.id) as document:
            removed = document.delete_category(category_id)
        self.logger.debug(f"Deleted category {category_id} of account {user.id} and {len(removed)} of its cards.")
        return OkResponse()

    # -------------------------------------------------------------------------
    # Card handlers
    # -------------------------------------------------------------------------

    def list_cards(self, user: AccountIdentity, category_id: str) -> List[Card]:
        return self.documents.load(user.id).list_cards(category_id)

    def create_card(self, user: AccountIdentity, category_id: str, payload: CardCreatePayload) -> Card:
        with self.documents.transaction(user.id) as document:
            return document.create_card(category_id, payload.word, payload.translation)

    def update_card(self, user: AccountIdentity, card_id: str, payload: CardUpdatePayload) -> Card:
        with self.documents.transaction(user.id) as document:
            return document.update_card(card_id, word=payload.word, translation=payload.translation)

    def delete_card(self, user: AccountIdentity, card_id: str) -> OkResponse:
        with self.documents.transaction(user.id) as document:
            document.delete_card(card_id)
        return OkResponse()

    # -------------------------------------------------------------------------
    # Launching
    # -------------------------------------------------------------------------

    def run(self, host: Optional[str] = None, port: Optional[int] = None, **kwargs) -> None:
        """Serve the app with uvicorn, blocking until interrupted."""
        import uvicorn

        server = self.settings.VOCABDECK_SERVER
        uvicorn.run(self.app, host=host or server.HOST, port=port or server.PORT, **kwargs)
