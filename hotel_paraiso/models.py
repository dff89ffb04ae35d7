# hotel_paraiso/models.py
from hotel_paraiso import db
from hotel_paraiso.validation import ESTADOS, TIPOS_HABITACION


class Reserva(db.Model):
    __tablename__ = 'reservas'

    # El id lo asigna el store (ultimo id + 1), no la base de datos
    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    hotel = db.Column(db.String(100), nullable=False)
    # Fechas ISO guardadas como texto, igual que en el archivo JSON
    fecha_inicio = db.Column(db.String(10), nullable=False)
    fecha_fin = db.Column(db.String(10), nullable=False)
    tipo_habitacion = db.Column(db.Enum(*TIPOS_HABITACION, name='tipo_habitacion'), nullable=False)
    estado = db.Column(db.Enum(*ESTADOS, name='estado_reserva'), nullable=False, default='pendiente')
    num_huespedes = db.Column(db.Integer, nullable=False)


def reserva_to_dict(reserva):
    return {
        'id': reserva.id,
        'hotel': reserva.hotel,
        'fecha_inicio': reserva.fecha_inicio,
        'fecha_fin': reserva.fecha_fin,
        'tipo_habitacion': reserva.tipo_habitacion,
        'estado': reserva.estado,
        'num_huespedes': reserva.num_huespedes
    }
