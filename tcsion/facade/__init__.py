from .tcsion_facade import TCSionFacade

__all__ = ['TCSionFacade']
