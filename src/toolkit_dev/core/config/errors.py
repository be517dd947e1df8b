# src/toolkit_dev/core/config/errors.py
"""
Exceções canônicas da camada de configuração de testes do Toolkit Dev.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, validação estrutural, busca de variantes e resolução
de configurações de teste (`*.test.yaml`).

Taxonomia:
    - NotFoundError     → arquivo ou variante inexistente
    - ConfigSyntaxError → texto estruturado inválido (YAML/JSON)
    - MissingFieldError → violação do schema mínimo

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Toda falha é terminal para a invocação corrente (sem retry)
    - Mensagens são de linha única e identificam campo, arquivo ou variante

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção carrega resultado parcial

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende do emissor de pipeline nem da CLI
"""

from typing import Optional


class ConfigError(Exception):
    """
    Exceção base para erros de configuração de teste.

    Permite captura genérica na fronteira da CLI, mantendo distinção
    clara entre falhas de configuração e falhas inesperadas.
    """


class NotFoundError(ConfigError):
    """Recurso nomeado (arquivo ou variante) não existe."""


class TestConfigNotFoundError(NotFoundError):
    """
    Arquivo de configuração de teste não encontrado.

    Levantada tanto pelo loader (caminho explícito inexistente) quanto
    pela descoberta por convenção (`find_test_config`).
    """

    __test__ = False


class VariantNotFoundError(NotFoundError):
    """
    Variante solicitada não declarada em `variants`.

    A busca é exata e sensível a maiúsculas; a mensagem sempre contém
    o nome literal solicitado.
    """

    def __init__(self, name: str):
        super().__init__(f"Variant '{name}' not found")
        self.name = name


class ScriptFileNotFoundError(NotFoundError):
    """`verification.script_file` aponta para um arquivo inexistente."""


class ConfigSyntaxError(ConfigError):
    """Conteúdo do arquivo não pôde ser interpretado como YAML/JSON."""


class InvalidConfigRootTypeError(ConfigSyntaxError):
    """
    Exceção levantada quando o conteúdo raiz não é um mapeamento.

    Decisões arquiteturais:
        - Um documento de teste é sempre um mapa chave-valor
        - Listas ou escalares no root são tratados como sintaxe inválida

    Limites explícitos:
        - Não tenta normalizar ou encapsular estruturas inválidas
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada pelo loader.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class MissingFieldError(ConfigError):
    """
    Campo obrigatório ausente no documento de teste.

    O atributo `field` expõe o caminho pontuado do primeiro campo
    ausente (ex.: `verification.image.repository`).
    """

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Missing required field: {field}")
        self.field = field


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge de settings.

    Exemplo de conflito:
        - base:     {"object_store": {"endpoint": "http://..."}}
        - override: {"object_store": "http://..."}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
