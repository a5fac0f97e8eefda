import logging
from collections import namedtuple

import numpy as np
from openquake.hazardlib.scalerel.base import BaseMSRSigma, BaseASRSigma

logger = logging.getLogger(__name__)

NAME = 'Thingbaijam et al.(2017)'

CRUSTAL = 'crustal'
INTERFACE = 'interface'
REGIMES = (CRUSTAL, INTERFACE)

STRIKE_SLIP = 'strike-slip'
REVERSE = 'reverse'
NORMAL = 'normal'

# Label used in the descriptive name, per mechanism
MECHANISM_LABELS = {
    STRIKE_SLIP: 'strike-slip',
    REVERSE: 'shallow reverse-faulting',
    NORMAL: 'normal-faulting',
    INTERFACE: 'interface',
}
NOT_AVAILABLE = 'not available'

Coefficients = namedtuple('Coefficients',
                          ['mag_a', 'mag_b', 'area_a', 'area_b', 'sigma'])

# mag = mag_a + mag_b * log10(area); area = 10 ** (area_a + area_b * mag)
# sigma is for log10 of the dependent variable
COEFFS = {
    STRIKE_SLIP: Coefficients(3.701, 1.062, -3.486, 0.942, 0.184),
    REVERSE: Coefficients(4.158, 0.953, -4.362, 1.049, 0.121),
    NORMAL: Coefficients(3.157, 1.238, -2.551, 0.808, 0.181),
    INTERFACE: Coefficients(3.469, 1.054, -3.292, 0.949, 0.150),
}


class InvalidRegimeError(ValueError):
    pass


class InvalidRakeError(ValueError):
    pass


def check_regime(regime):
    '''
    Validates a tectonic regime name, case-insensitively.
    Args:
    - regime: 'crustal' or 'interface'
    Return:
    - lower case regime name
    '''
    if isinstance(regime, str) and regime.lower() in REGIMES:
        return regime.lower()
    raise InvalidRegimeError(
        f'Invalid regime {regime!r}, expected one of {", ".join(REGIMES)}')


def check_rake(rake):
    '''
    Validates a rake angle in degrees. None (or NaN) means the rake is not known
    and is passed through as None.
    Args:
    - rake: rake in degrees, -180 to 180, or None
    Return:
    - rake as float, or None
    '''
    if rake is None:
        return None
    rake = float(rake)
    if np.isnan(rake):
        return None
    if not -180. <= rake <= 180.:
        raise InvalidRakeError(f'Invalid rake {rake}, must be in [-180, 180]')
    return rake


class RuptureParams(namedtuple('RuptureParams', ['rake', 'regime'])):
    """
    Rake (degrees, None when not known) and regime of a rupture.
    Both are checked on construction, so NaN rake is stored as None and the
    regime is lower case.
    """
    __slots__ = ()

    def __new__(cls, rake=None, regime=CRUSTAL):
        return super().__new__(cls, check_rake(rake), check_regime(regime))

    def _replace(self, **kwargs):
        return RuptureParams(**dict(self._asdict(), **kwargs))


def get_fault_mechanism(rake, regime=CRUSTAL):
    '''
    Classifies the faulting mechanism. The strike slip band is tested first so
    that +-45 and +-135 are strike slip.
    Args:
    - rake: rake in degrees, or None/NaN
    - regime: 'crustal' or 'interface', any case
    Return:
    - mechanism name, or None when rake is not known
    '''
    rake = check_rake(rake)
    regime = check_regime(regime)
    if rake is None:
        return None
    if regime == INTERFACE:
        return INTERFACE
    if (-45 <= rake <= 45) or (rake >= 135) or (rake <= -135):
        return STRIKE_SLIP
    elif rake > 0.:
        return REVERSE
    else:
        return NORMAL


def get_coefficients(mechanism):
    '''
    Regression coefficients and sigma for a mechanism name.
    '''
    return COEFFS[mechanism]


def _coefficients(params):
    mechanism = get_fault_mechanism(params.rake, params.regime)
    if mechanism is None:
        return None
    return get_coefficients(mechanism)


def median_mag_from_area(area, params):
    '''
    Median moment magnitude from rupture area (km^2).
    '''
    coeffs = _coefficients(params)
    if coeffs is None:
        return None
    return coeffs.mag_a + coeffs.mag_b * np.log10(area)


def median_area_from_mag(mag, params):
    '''
    Median rupture area (km^2) from moment magnitude.
    '''
    coeffs = _coefficients(params)
    if coeffs is None:
        return None
    return np.power(10., coeffs.area_a + coeffs.area_b * mag)


def std_dev(params):
    '''
    Standard deviation of log10(area) given magnitude, which is also used for
    magnitude given area.
    '''
    coeffs = _coefficients(params)
    if coeffs is None:
        return None
    return coeffs.sigma


def describe(params):
    mechanism = get_fault_mechanism(params.rake, params.regime)
    label = MECHANISM_LABELS.get(mechanism, NOT_AVAILABLE)
    return f'{NAME} for {label} events'


_KEEP = object()


class Thingbaijam2017(BaseMSRSigma, BaseASRSigma):
    """
    Thingbaijam, K.K.S., P.M. Mai, K. Goda 2017. New empirical earthquake source-scaling
    laws. Bulletin of the Seismological Society of America, 107(5), pp 2225-2246.

    Implements magnitude-area and area-magnitude scaling relationships with standard
    deviations. In addition to rake, the regime ('crustal' or 'interface') distinguishes
    shallow crustal from subduction-interface events; the default is 'crustal'.
    The normal faulting relations are also applicable to intraslab events.

    Rake and regime are held as a RuptureParams value. Calls that pass rake and/or
    regime store them first, then evaluate, so later calls without them reuse
    the stored values. Rake left unset (None) gives None for every estimate.
    Fixed seismogenic (saturated) width is not handled.
    """

    def __init__(self, regime=CRUSTAL, rake=None):
        self.params = RuptureParams(rake, regime)

    def __repr__(self):
        return '<%s rake=%s regime=%s>' % (
            self.__class__.__name__, self.params.rake, self.params.regime)

    @property
    def rake(self):
        return self.params.rake

    @property
    def regime(self):
        return self.params.regime

    def set_regime(self, regime):
        """
        Sets the regime, 'crustal' or 'interface' (any case).
        """
        self.params = self.params._replace(regime=regime)
        logger.debug(f'Regime set to {self.params.regime}')

    def set_rake(self, rake):
        """
        Sets the rake in degrees; None or NaN marks the rake as not known.
        """
        self.params = self.params._replace(rake=rake)
        logger.debug(f'Rake set to {self.params.rake}')

    def _update(self, rake, regime):
        # Both values are checked before either is stored
        params = self.params
        if regime is not None:
            params = params._replace(regime=regime)
        if rake is not _KEEP:
            params = params._replace(rake=rake)
        if params != self.params:
            logger.debug(f'Rupture parameters set to {params}')
        self.params = params

    def get_median_mag(self, area, rake=_KEEP, regime=None):
        """
        Calculates median magnitude from fault area (km^2).
        """
        self._update(rake, regime)
        return median_mag_from_area(area, self.params)

    def get_median_area(self, mag, rake=_KEEP, regime=None):
        """
        Calculates median fault area (km^2) from magnitude.
        """
        self._update(rake, regime)
        return median_area_from_mag(mag, self.params)

    def get_mag_std_dev(self, rake=_KEEP, regime=None):
        """
        Standard deviation of magnitude as a function of area.
        """
        self._update(rake, regime)
        return std_dev(self.params)

    def get_area_std_dev(self, rake=_KEEP, regime=None):
        """
        Standard deviation of log10(area) as a function of magnitude.
        """
        self._update(rake, regime)
        return std_dev(self.params)

    def get_std_dev_mag(self, area=None, rake=_KEEP, regime=None):
        return self.get_mag_std_dev(rake, regime)

    def get_std_dev_area(self, mag=None, rake=_KEEP, regime=None):
        return self.get_area_std_dev(rake, regime)

    def get_description(self):
        """
        Returns the name of the relation with the current faulting type.
        """
        return describe(self.params)
