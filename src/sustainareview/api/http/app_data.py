from dataclasses import dataclass

from src.sustainareview.core.services import (
    DbSessionService,
    EmailService,
    JwtGeneratorService,
    JwtVerificationService,
    PhotoStorageService,
)


@dataclass
class ApplicationDependencies:
    jwt_verify_service: JwtVerificationService
    jwt_generation_service: JwtGeneratorService
    database_service: DbSessionService
    email_service: EmailService
    photo_storage: PhotoStorageService
