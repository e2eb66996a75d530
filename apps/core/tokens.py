# apps/core/tokens.py

"""
Emissão e validação de tokens JWT (bearer)

O token carrega o id do usuário em `sub`. A validação é stateless:
nenhuma consulta ao banco é feita aqui.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from jose import jwt, JWTError

from .exceptions import AuthenticationFailure

logger = logging.getLogger(__name__)

BEARER_PREFIX = 'Bearer '


def issue_token(user) -> str:
    """Gera token assinado para o usuário"""
    agora = timezone.now()
    payload = {
        'sub': str(user.pk),
        'email': user.email,
        'iat': int(agora.timestamp()),
        'exp': int((agora + timedelta(seconds=settings.JWT_EXPIRATION_SECONDS)).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> int:
    """
    Valida o token e retorna o id do usuário

    Assinatura inválida, expiração ou `sub` ausente viram AuthenticationFailure.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.debug("Token rejeitado: %s", e)
        raise AuthenticationFailure('Token inválido ou expirado') from e

    sub = payload.get('sub')
    try:
        return int(sub)
    except (TypeError, ValueError):
        raise AuthenticationFailure('Token inválido ou expirado')


def bearer_token(request):
    """Extrai o token do header Authorization, ou None"""
    header = request.headers.get('Authorization', '')
    if not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):].strip()
    return token or None
