"""
Ledger port interface.

This module defines the protocol for the append-only row store.
"""

from typing import List, Protocol

class LedgerPort(Protocol):
    """Planilha append-only de eventos

    Pré-condição: as linhas voltam na ordem de inserção, então a última
    linha retornada é o evento mais recente.
    """
    
    async def read_rows(self) -> List[List[str]]:
        """
        Lê todas as linhas do intervalo configurado.
        
        Returns:
            linhas na ordem de inserção ([] se vazia)
        """
        ...
    
    async def append_row(self, row: List[str]) -> None:
        """
        Acrescenta uma linha ao final da planilha.
        
        Args:
            row: linha de 23 colunas
        """
        ...
