from frota.models.Permissions import Action, Resource, Role

_ALL = {action: True for action in Action}
_READ_ONLY = {Action.VIEW: True, Action.ADD: False, Action.EDIT: False, Action.DELETE: False}
_NONE = {action: False for action in Action}
_OWN_PROFILE = {Action.VIEW: True, Action.ADD: False, Action.EDIT: True, Action.DELETE: False}

# Permissões por omissão dos papéis não administrativos.  Só servem para
# semear a tabela; depois disso a tabela persistida é a única fonte.
DEFAULT_ROLE_PERMISSIONS = {
    Role.DIRECTION: {
        Resource.VEHICLES: _READ_ONLY,
        Resource.DRIVERS: _READ_ONLY,
        Resource.TOURS: _READ_ONLY,
        Resource.FUEL_ENTRIES: _READ_ONLY,
        Resource.DOCUMENTS: _READ_ONLY,
        Resource.MAINTENANCE_ENTRIES: _READ_ONLY,
        Resource.PRE_DEPARTURE_CHECKLISTS: _READ_ONLY,
        Resource.USERS: _READ_ONLY,
        Resource.PROFILE: _OWN_PROFILE,
        Resource.PERMISSIONS: _NONE,
    },
    Role.STANDARD_USER: {
        Resource.VEHICLES: _ALL,
        Resource.DRIVERS: _ALL,
        Resource.TOURS: _ALL,
        Resource.FUEL_ENTRIES: _ALL,
        Resource.DOCUMENTS: _ALL,
        Resource.MAINTENANCE_ENTRIES: _ALL,
        Resource.PRE_DEPARTURE_CHECKLISTS: _ALL,
        Resource.USERS: _NONE,
        Resource.PROFILE: _OWN_PROFILE,
        Resource.PERMISSIONS: _NONE,
    },
}

ROLE_LABELS = {
    Role.ADMIN: 'Administrador',
    Role.DIRECTION: 'Direção',
    Role.STANDARD_USER: 'Utilizador',
}

RESOURCE_LABELS = {
    Resource.VEHICLES: 'Veículos',
    Resource.DRIVERS: 'Motoristas',
    Resource.TOURS: 'Viagens',
    Resource.FUEL_ENTRIES: 'Combustível',
    Resource.DOCUMENTS: 'Documentos',
    Resource.MAINTENANCE_ENTRIES: 'Manutenção',
    Resource.PRE_DEPARTURE_CHECKLISTS: 'Checklists de pré-partida',
    Resource.USERS: 'Utilizadores',
    Resource.PROFILE: 'Perfil próprio',
    Resource.PERMISSIONS: 'Permissões',
}

ACTION_LABELS = {
    Action.VIEW: 'Ver',
    Action.ADD: 'Adicionar',
    Action.EDIT: 'Editar',
    Action.DELETE: 'Apagar',
}
