# apps/core/auth_service.py

"""
Serviço de Autenticação - Encapsula toda lógica de registro e login
As views só traduzem HTTP; regras e erros ficam aqui
"""

import logging
from typing import Dict

from django.contrib.auth.password_validation import MinimumLengthValidator, validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from .exceptions import AuthenticationFailure, Conflict, ValidationError
from .models import User
from .tokens import issue_token

logger = logging.getLogger(__name__)


def _texto(valor, campo: str) -> str:
    """Campo de texto vindo do JSON; ausente vira string vazia"""
    if valor is None:
        return ''
    if not isinstance(valor, str):
        raise ValidationError(f"Campo {campo} deve ser texto")
    return valor


class AuthenticationService:
    """
    Serviço encapsulado para registro e login com JWT

    Ambos os fluxos devolvem {token, username}, onde username é o
    nome de exibição do usuário.
    """

    def __init__(self, password_min_length=None):
        self._password_min_length = password_min_length

    def _password_validators(self):
        """AUTH_PASSWORD_VALIDATORS, ou só o tamanho mínimo se informado no construtor"""
        if self._password_min_length is not None:
            return [MinimumLengthValidator(min_length=self._password_min_length)]
        return None

    def register(self, name: str, email: str, password: str) -> Dict[str, str]:
        """
        Registra novo usuário

        Raises:
            ValidationError: campos ausentes, email ou senha inválidos
            Conflict: email já cadastrado
        """
        name = _texto(name, 'name').strip()
        email = _texto(email, 'email').strip()
        password = _texto(password, 'password')

        self._validar_dados_registro(name, email, password)

        if self._email_existe(email):
            logger.info("Registro recusado: email já cadastrado (%s)", email)
            raise Conflict()

        try:
            with transaction.atomic():
                usuario = User.objects.create_user(email=email, password=password, name=name)
        except IntegrityError as e:
            # Corrida entre dois registros com o mesmo email
            raise Conflict() from e

        logger.info("Usuário registrado: id=%s", usuario.pk)
        return self._resposta_token(usuario)

    def login(self, email: str, password: str) -> Dict[str, str]:
        """
        Autentica por email e senha

        Raises:
            AuthenticationFailure: email desconhecido, senha errada ou conta desativada
        """
        usuario = self._autenticar_usuario(
            _texto(email, 'email').strip(), _texto(password, 'password')
        )
        if usuario is None:
            logger.warning("Tentativa de login falhada para: %s", email)
            raise AuthenticationFailure()

        logger.info("Login realizado: id=%s", usuario.pk)
        return self._resposta_token(usuario)

    # =================== MÉTODOS PRIVADOS (ENCAPSULADOS) ===================

    def _validar_dados_registro(self, name: str, email: str, password: str):
        """Valida dados de entrada para registro"""
        for campo, valor in (('name', name), ('email', email), ('password', password)):
            if not valor:
                raise ValidationError(f"Campo {campo} é obrigatório")

        # Validar email básico
        if '@' not in email or '.' not in email.split('@')[-1]:
            raise ValidationError("Email inválido")

        try:
            validate_password(password, password_validators=self._password_validators())
        except DjangoValidationError as e:
            raise ValidationError(" ".join(e.messages)) from e

    def _email_existe(self, email: str) -> bool:
        return User.objects.filter(email=email).exists()

    def _autenticar_usuario(self, email: str, password: str):
        """Retorna o usuário se as credenciais conferem, senão None"""
        if not email or not password:
            return None

        try:
            usuario = User.objects.get(email=email)
        except User.DoesNotExist:
            # Mesmo custo de hash do caso de senha errada
            User().set_password(password)
            return None

        if not usuario.check_password(password) or not usuario.is_enabled:
            return None

        return usuario

    def _resposta_token(self, usuario: User) -> Dict[str, str]:
        return {
            'token': issue_token(usuario),
            'username': usuario.name,
        }


# Instância global do serviço (Singleton pattern)
auth_service = AuthenticationService()
